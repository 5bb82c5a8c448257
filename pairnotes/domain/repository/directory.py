"""Public directory repository interface."""

from abc import ABC, abstractmethod

from pairnotes.domain.model.directory import DirectoryEntry
from pairnotes.domain.value import Email, PrincipalId


class DirectoryRepository(ABC):
    """Repository for public directory entries (``publicDirectory/{principalId}``)."""

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> DirectoryEntry | None:
        """Find a directory entry by principal ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> DirectoryEntry | None:
        """Find the first directory entry with this (normalised) email.

        Used to resolve "invite partner by email".
        """
        pass

    @abstractmethod
    async def save(self, entry: DirectoryEntry) -> DirectoryEntry:
        """Save a directory entry (create or replace)."""
        pass
