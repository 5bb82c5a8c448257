"""PostgreSQL transaction runner.

Each attempt runs in its own ``SERIALIZABLE`` transaction. Documents are read
with ``SELECT ... FOR UPDATE`` and writes are buffered until the body
returns, so a body that raises writes nothing. Serialization failures and
unique violations (two attempts inserting the same new document) roll the
attempt back and run the body again.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import logfire
from sqlalchemy import Table, and_, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pairnotes.domain.error import TransactionConflictError
from pairnotes.domain.model import Pair, PairInvite, Profile, Report
from pairnotes.domain.repository import Transaction, TransactionRunner
from pairnotes.domain.value import InviteId, PairId, PrincipalId, ReportId
from pairnotes.persistence.database import upsert
from pairnotes.persistence.mappers import (
    row_to_invite,
    row_to_pair,
    row_to_profile,
    row_to_report,
    to_row,
)
from pairnotes.persistence.tables import (
    pair_invites_table,
    pairs_table,
    profiles_table,
    reports_table,
)

T = TypeVar("T")

SERIALIZATION_FAILURE = "40001"
DEADLOCK_DETECTED = "40P01"


def is_conflict(error: DBAPIError) -> bool:
    """True when the error means "another transaction got there first"."""
    if isinstance(error, IntegrityError):
        return True
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
        error.orig, "pgcode", None
    )
    return sqlstate in (SERIALIZATION_FAILURE, DEADLOCK_DETECTED)


class PostgresTransaction(Transaction):
    """One attempt bound to a session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._writes: dict[tuple[str, tuple], tuple[Table, dict[str, Any]]] = {}

    async def _get_for_update(self, table: Table, mapper, **key: str) -> Any:
        buffered = self._writes.get((table.name, tuple(key.values())))
        if buffered is not None:
            return mapper(buffered[1])
        stmt = (
            select(table)
            .where(and_(*(table.c[name] == value for name, value in key.items())))
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return mapper(dict(row)) if row else None

    def _put(self, table: Table, row: dict[str, Any], *key: str) -> None:
        self._writes[(table.name, key)] = (table, row)

    async def get_profile(self, principal_id: PrincipalId) -> Profile | None:
        return await self._get_for_update(
            profiles_table, row_to_profile, id=principal_id
        )

    async def get_pair(self, pair_id: PairId) -> Pair | None:
        return await self._get_for_update(pairs_table, row_to_pair, id=pair_id)

    async def get_invite(self, invite_id: InviteId) -> PairInvite | None:
        return await self._get_for_update(
            pair_invites_table, row_to_invite, id=invite_id
        )

    async def get_report(self, pair_id: PairId, report_id: ReportId) -> Report | None:
        return await self._get_for_update(
            reports_table, row_to_report, pair_id=pair_id, id=report_id
        )

    def put_profile(self, profile: Profile) -> None:
        self._put(profiles_table, to_row(profile), profile.id)

    def put_pair(self, pair: Pair) -> None:
        self._put(pairs_table, to_row(pair), pair.id)

    def put_invite(self, invite: PairInvite) -> None:
        self._put(pair_invites_table, to_row(invite), invite.id)

    def put_report(self, report: Report) -> None:
        self._put(reports_table, to_row(report), report.pair_id, report.id)

    async def flush(self) -> None:
        """Apply buffered writes in the order they were made."""
        for table, row in self._writes.values():
            await self.session.execute(upsert(table, row))


class PostgresTransactionRunner(TransactionRunner):
    """Runs transaction bodies in SERIALIZABLE transactions with retry."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: int = 5,
    ) -> None:
        self.session_factory = session_factory
        self.max_attempts = max_attempts

    async def run(self, body: Callable[[Transaction], Awaitable[T]]) -> T:
        for attempt in range(1, self.max_attempts + 1):
            async with self.session_factory() as session:
                await session.connection(
                    execution_options={"isolation_level": "SERIALIZABLE"}
                )
                tx = PostgresTransaction(session)
                try:
                    result = await body(tx)
                    await tx.flush()
                    await session.commit()
                    return result
                except DBAPIError as e:
                    await session.rollback()
                    if not is_conflict(e):
                        raise
                    logfire.warn(
                        "Transaction conflict, retrying",
                        attempt=attempt,
                        error=str(e.orig),
                    )
        raise TransactionConflictError(self.max_attempts)
