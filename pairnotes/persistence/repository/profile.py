"""PostgreSQL implementation of Profile repository."""

from collections.abc import AsyncIterator
from typing import Optional

from sqlalchemy import select

from pairnotes.domain.model import Profile
from pairnotes.domain.repository import ProfileRepository
from pairnotes.domain.value import PrincipalId
from pairnotes.persistence.database import poll, upsert
from pairnotes.persistence.mappers import row_to_profile, to_row
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import profiles_table


class PostgresProfileRepository(PostgresRepository, ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Profile]:
        """Find a profile by principal ID.

        Args:
            principal_id: Owning principal

        Returns:
            Profile if found, None otherwise
        """
        stmt = select(profiles_table).where(profiles_table.c.id == principal_id)
        return await self._fetch_one(stmt, row_to_profile)

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or replace).

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        await self._execute(upsert(profiles_table, to_row(profile)))
        return profile

    def watch(self, principal_id: PrincipalId) -> AsyncIterator[Optional[Profile]]:
        """Poll one profile and yield it whenever it changes."""
        return poll(lambda: self.find_by_id(principal_id), self.poll_interval_seconds)
