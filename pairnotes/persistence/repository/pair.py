"""PostgreSQL implementation of Pair repository (read side)."""

from collections.abc import AsyncIterator
from typing import Optional

from sqlalchemy import select

from pairnotes.domain.model import Pair
from pairnotes.domain.repository import PairRepository
from pairnotes.domain.value import PairId, PairStatus, PrincipalId
from pairnotes.persistence.database import poll
from pairnotes.persistence.mappers import row_to_pair
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import pairs_table


class PostgresPairRepository(PostgresRepository, PairRepository):
    """PostgreSQL implementation of PairRepository."""

    async def find_by_id(self, pair_id: PairId) -> Optional[Pair]:
        """Find a pair by its canonical ID."""
        stmt = select(pairs_table).where(pairs_table.c.id == pair_id)
        return await self._fetch_one(stmt, row_to_pair)

    async def find_active_for_member(self, principal_id: PrincipalId) -> Optional[Pair]:
        """Find the active pair whose members contain ``principal_id``.

        Uses the GIN index on ``members`` (array containment).
        """
        stmt = (
            select(pairs_table)
            .where(pairs_table.c.members.contains([principal_id]))
            .where(pairs_table.c.status == PairStatus.ACTIVE.value)
            .limit(1)
        )
        return await self._fetch_one(stmt, row_to_pair)

    def watch_active_for_member(
        self, principal_id: PrincipalId
    ) -> AsyncIterator[Optional[Pair]]:
        """Poll the principal's active pair."""
        return poll(
            lambda: self.find_active_for_member(principal_id),
            self.poll_interval_seconds,
        )
