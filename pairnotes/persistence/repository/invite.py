"""PostgreSQL implementation of PairInvite repository."""

from collections.abc import AsyncIterator
from typing import Optional

from sqlalchemy import and_, select

from pairnotes.domain.model import PairInvite
from pairnotes.domain.repository import InviteRepository
from pairnotes.domain.value import InviteId, InviteStatus, PrincipalId
from pairnotes.persistence.database import poll, upsert
from pairnotes.persistence.mappers import row_to_invite, to_row
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import pair_invites_table


class PostgresInviteRepository(PostgresRepository, InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    async def find_by_id(self, invite_id: InviteId) -> Optional[PairInvite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(pair_invites_table).where(pair_invites_table.c.id == invite_id)
        return await self._fetch_one(stmt, row_to_invite)

    async def exists_pending(self, from_uid: PrincipalId, to_uid: PrincipalId) -> bool:
        """Check if a pending invite exists from ``from_uid`` to ``to_uid``.

        Fast check without loading full invite data.
        """
        stmt = (
            select(pair_invites_table.c.id)
            .where(
                and_(
                    pair_invites_table.c.from_uid == from_uid,
                    pair_invites_table.c.to_uid == to_uid,
                    pair_invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .limit(1)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.first() is not None

    async def save(self, invite: PairInvite) -> PairInvite:
        """Save an invite (create or replace)."""
        await self._execute(upsert(pair_invites_table, to_row(invite)))
        return invite

    async def _find_by(
        self, column_name: str, uid: PrincipalId, status: InviteStatus | None
    ) -> list[PairInvite]:
        column = pair_invites_table.c[column_name]
        stmt = select(pair_invites_table).where(column == uid)
        if status is not None:
            stmt = stmt.where(pair_invites_table.c.status == status.value)
        stmt = stmt.order_by(pair_invites_table.c.created_at.desc())
        return await self._fetch_all(stmt, row_to_invite)

    async def find_by_recipient(
        self, to_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites addressed to a principal, newest first."""
        return await self._find_by("to_uid", to_uid, status)

    async def find_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites sent by a principal, newest first."""
        return await self._find_by("from_uid", from_uid, status)

    def watch_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus
    ) -> AsyncIterator[list[PairInvite]]:
        """Poll a sender's invites with the given status."""
        return poll(
            lambda: self.find_by_sender(from_uid, status), self.poll_interval_seconds
        )
