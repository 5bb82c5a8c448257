"""In-memory public directory repository for testing."""

from typing import Optional

from pairnotes.domain.model.directory import DirectoryEntry
from pairnotes.domain.repository.directory import DirectoryRepository
from pairnotes.domain.value import Email, PrincipalId

from .store import PUBLIC_DIRECTORY, InMemoryDocumentStore, directory_path


class InMemoryDirectoryRepository(DirectoryRepository):
    """In-memory implementation of DirectoryRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[DirectoryEntry]:
        """Find a directory entry by principal ID."""
        return self._store.get(directory_path(principal_id))

    async def find_by_email(self, email: Email) -> Optional[DirectoryEntry]:
        """Find a directory entry by exact (normalised) email."""
        for entry in self._store.list(PUBLIC_DIRECTORY):
            if entry.email == email.root:
                return entry
        return None

    async def save(self, entry: DirectoryEntry) -> DirectoryEntry:
        """Save or replace a directory entry."""
        await self._store.write(directory_path(entry.id), entry)
        return entry
