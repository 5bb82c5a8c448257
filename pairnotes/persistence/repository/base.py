"""Shared plumbing for PostgreSQL repositories."""

from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.sql.expression import Executable
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

T = TypeVar("T")


class PostgresRepository:
    """Base for repositories that open a short-lived session per operation.

    Repositories outlive HTTP requests (live queries and pair sessions run in
    the background), so they hold the session factory instead of a session.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        poll_interval_seconds: float = 2.0,
    ) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
            poll_interval_seconds: Re-read interval for live queries
        """
        self.session_factory = session_factory
        self.poll_interval_seconds = poll_interval_seconds

    async def _fetch_one(
        self, stmt: Executable, mapper: Callable[[dict[str, Any]], T]
    ) -> T | None:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
            return mapper(dict(row)) if row else None

    async def _fetch_all(
        self, stmt: Executable, mapper: Callable[[dict[str, Any]], T]
    ) -> list[T]:
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [mapper(dict(row)) for row in result.mappings().all()]

    async def _execute(self, stmt: Executable) -> None:
        async with self.session_factory() as session:
            await session.execute(stmt)
            await session.commit()
