"""PostgreSQL implementation of the public directory repository."""

from typing import Optional

from sqlalchemy import select

from pairnotes.domain.model import DirectoryEntry
from pairnotes.domain.repository import DirectoryRepository
from pairnotes.domain.value import Email, PrincipalId
from pairnotes.persistence.database import upsert
from pairnotes.persistence.mappers import row_to_directory_entry, to_row
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import public_directory_table


class PostgresDirectoryRepository(PostgresRepository, DirectoryRepository):
    """PostgreSQL implementation of DirectoryRepository."""

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[DirectoryEntry]:
        """Find a directory entry by principal ID."""
        stmt = select(public_directory_table).where(
            public_directory_table.c.id == principal_id
        )
        return await self._fetch_one(stmt, row_to_directory_entry)

    async def find_by_email(self, email: Email) -> Optional[DirectoryEntry]:
        """Find the first directory entry with this email.

        Emails are stored normalised, so this is an exact match.
        """
        stmt = (
            select(public_directory_table)
            .where(public_directory_table.c.email == email.root)
            .limit(1)
        )
        return await self._fetch_one(stmt, row_to_directory_entry)

    async def save(self, entry: DirectoryEntry) -> DirectoryEntry:
        """Save a directory entry (create or replace)."""
        await self._execute(upsert(public_directory_table, to_row(entry)))
        return entry
