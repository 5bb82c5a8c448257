"""In-memory profile repository for testing."""

from collections.abc import AsyncIterator
from typing import Optional

from pairnotes.domain.model.profile import Profile
from pairnotes.domain.repository.profile import ProfileRepository
from pairnotes.domain.value import PrincipalId

from .store import InMemoryDocumentStore, profile_path


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Profile]:
        """Find a profile by principal ID."""
        return self._store.get(profile_path(principal_id))

    async def save(self, profile: Profile) -> Profile:
        """Save or replace a profile."""
        await self._store.write(profile_path(profile.id), profile)
        return profile

    async def watch(
        self, principal_id: PrincipalId
    ) -> AsyncIterator[Optional[Profile]]:
        """Live feed of one profile."""
        path = profile_path(principal_id)
        async for profile in self._store.watch(lambda: self._store.get(path)):
            yield profile
