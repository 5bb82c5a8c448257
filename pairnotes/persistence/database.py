"""Database connection, session management and shared statement helpers.

Provides the async engine and session factory for PostgreSQL, an upsert
helper for document-style writes, and the polling loop behind live queries.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import Table
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pairnotes.config import Settings

T = TypeVar("T")

_UNSET: Any = object()


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def upsert(table: Table, values: dict[str, Any]) -> Insert:
    """Build an ``INSERT ... ON CONFLICT (pk) DO UPDATE`` replacing the row.

    Documents are written whole, so every non-key column is overwritten.
    """
    key = [column.name for column in table.primary_key.columns]
    stmt = insert(table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=key,
        set_={name: stmt.excluded[name] for name in values if name not in key},
    )


async def poll(
    query: Callable[[], Awaitable[T]], interval_seconds: float
) -> AsyncIterator[T]:
    """Re-run ``query`` every ``interval_seconds`` and yield changed results.

    The first result is always yielded. Consecutive equal results are not.
    """
    last: Any = _UNSET
    while True:
        value = await query()
        if value != last:
            last = value
            yield value
        await asyncio.sleep(interval_seconds)
