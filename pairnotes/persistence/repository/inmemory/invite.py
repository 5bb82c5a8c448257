"""In-memory pair invite repository for testing."""

from collections.abc import AsyncIterator
from typing import Optional

from pairnotes.domain.model.invite import PairInvite
from pairnotes.domain.repository.invite import InviteRepository
from pairnotes.domain.value import InviteId, InviteStatus, PrincipalId

from .store import PAIR_INVITES, InMemoryDocumentStore, invite_path


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    def _select(self, **fields) -> list[PairInvite]:
        invites = [
            invite
            for invite in self._store.list(PAIR_INVITES)
            if all(
                value is None or getattr(invite, name) == value
                for name, value in fields.items()
            )
        ]
        return sorted(invites, key=lambda i: i.created_at, reverse=True)

    async def find_by_id(self, invite_id: InviteId) -> Optional[PairInvite]:
        """Find an invite by ID."""
        return self._store.get(invite_path(invite_id))

    async def exists_pending(self, from_uid: PrincipalId, to_uid: PrincipalId) -> bool:
        """Check for a pending invite from one principal to another."""
        return bool(
            self._select(from_uid=from_uid, to_uid=to_uid, status=InviteStatus.PENDING)
        )

    async def save(self, invite: PairInvite) -> PairInvite:
        """Save or replace an invite."""
        await self._store.write(invite_path(invite.id), invite)
        return invite

    async def find_by_recipient(
        self, to_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites addressed to a principal."""
        return self._select(to_uid=to_uid, status=status)

    async def find_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites sent by a principal."""
        return self._select(from_uid=from_uid, status=status)

    async def watch_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus
    ) -> AsyncIterator[list[PairInvite]]:
        """Live feed of a sender's invites with the given status."""
        async for invites in self._store.watch(
            lambda: self._select(from_uid=from_uid, status=status)
        ):
            yield invites
