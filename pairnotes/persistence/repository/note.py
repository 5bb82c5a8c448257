"""PostgreSQL implementation of Note repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, select

from pairnotes.domain.model import Note
from pairnotes.domain.repository import NoteRepository
from pairnotes.domain.value import NoteId, PairId, PrincipalId
from pairnotes.persistence.database import upsert
from pairnotes.persistence.mappers import row_to_note, to_row
from pairnotes.persistence.repository.base import PostgresRepository
from pairnotes.persistence.tables import notes_table


class PostgresNoteRepository(PostgresRepository, NoteRepository):
    """PostgreSQL implementation of NoteRepository."""

    async def find_by_id(self, pair_id: PairId, note_id: NoteId) -> Optional[Note]:
        """Find a note in a pair."""
        stmt = select(notes_table).where(
            and_(notes_table.c.pair_id == pair_id, notes_table.c.id == note_id)
        )
        return await self._fetch_one(stmt, row_to_note)

    async def save(self, note: Note) -> Note:
        """Save a note (create or replace)."""
        await self._execute(upsert(notes_table, to_row(note)))
        return note

    async def delete(self, pair_id: PairId, note_id: NoteId) -> None:
        """Delete a note if it exists."""
        stmt = delete(notes_table).where(
            and_(notes_table.c.pair_id == pair_id, notes_table.c.id == note_id)
        )
        await self._execute(stmt)

    async def find_by_pair(
        self, pair_id: PairId, owner_uid: PrincipalId | None = None
    ) -> list[Note]:
        """Find a pair's notes, most recently updated first."""
        stmt = select(notes_table).where(notes_table.c.pair_id == pair_id)
        if owner_uid is not None:
            stmt = stmt.where(notes_table.c.owner_uid == owner_uid)
        stmt = stmt.order_by(notes_table.c.updated_at.desc())
        return await self._fetch_all(stmt, row_to_note)

    async def find_created_between(
        self, pair_id: PairId, start: datetime, end: datetime
    ) -> list[Note]:
        """Find notes with ``start <= created_at < end``, newest first.

        Args:
            pair_id: Pair whose notes to read
            start: Inclusive lower bound
            end: Exclusive upper bound

        Returns:
            Notes ordered by created_at descending
        """
        stmt = (
            select(notes_table)
            .where(
                and_(
                    notes_table.c.pair_id == pair_id,
                    notes_table.c.created_at >= start,
                    notes_table.c.created_at < end,
                )
            )
            .order_by(notes_table.c.created_at.desc())
        )
        return await self._fetch_all(stmt, row_to_note)
