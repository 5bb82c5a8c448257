"""Profile repository interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pairnotes.domain.model.profile import Profile
from pairnotes.domain.value import PrincipalId


class ProfileRepository(ABC):
    """Repository for Profile documents (``profiles/{principalId}``).

    Writes here are plain, non-transactional writes. Invariant-bearing changes
    go through a Transaction instead.
    """

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> Profile | None:
        """Find a profile by principal ID.

        Args:
            principal_id: Owning principal

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or replace).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass

    @abstractmethod
    def watch(self, principal_id: PrincipalId) -> AsyncIterator[Profile | None]:
        """Live feed of one profile.

        Yields the current value first, then every change. Consecutive
        identical snapshots are not repeated.
        """
        pass
