"""Pair invite repository interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pairnotes.domain.model.invite import PairInvite
from pairnotes.domain.value import InviteId, InviteStatus, PrincipalId


class InviteRepository(ABC):
    """Repository for PairInvite documents (``pairInvites/{inviteId}``).

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> PairInvite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending(self, from_uid: PrincipalId, to_uid: PrincipalId) -> bool:
        """Check if a pending invite exists in one direction.

        Used before invite creation to reject duplicates. Not transactional.

        Args:
            from_uid: Sender
            to_uid: Recipient

        Returns:
            True if a pending invite from ``from_uid`` to ``to_uid`` exists
        """
        pass

    @abstractmethod
    async def save(self, invite: PairInvite) -> PairInvite:
        """Save an invite (create or replace).

        Args:
            invite: The invite to save

        Returns:
            The saved invite
        """
        pass

    @abstractmethod
    async def find_by_recipient(
        self, to_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites addressed to a principal, newest first."""
        pass

    @abstractmethod
    async def find_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus | None = None
    ) -> list[PairInvite]:
        """Find invites sent by a principal, newest first."""
        pass

    @abstractmethod
    def watch_by_sender(
        self, from_uid: PrincipalId, status: InviteStatus
    ) -> AsyncIterator[list[PairInvite]]:
        """Live feed of invites sent by a principal with the given status."""
        pass
