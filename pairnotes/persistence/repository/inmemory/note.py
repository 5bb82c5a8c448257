"""In-memory note repository for testing."""

from datetime import datetime
from typing import Optional

from pairnotes.domain.model.note import Note
from pairnotes.domain.repository.note import NoteRepository
from pairnotes.domain.value import NoteId, PairId, PrincipalId

from .store import InMemoryDocumentStore, notes_collection


class InMemoryNoteRepository(NoteRepository):
    """In-memory implementation of NoteRepository for testing."""

    def __init__(self, store: InMemoryDocumentStore) -> None:
        self._store = store

    async def find_by_id(self, pair_id: PairId, note_id: NoteId) -> Optional[Note]:
        """Find a note in a pair."""
        return self._store.get(f"{notes_collection(pair_id)}/{note_id}")

    async def save(self, note: Note) -> Note:
        """Save or replace a note."""
        await self._store.write(f"{notes_collection(note.pair_id)}/{note.id}", note)
        return note

    async def delete(self, pair_id: PairId, note_id: NoteId) -> None:
        """Delete a note."""
        await self._store.write(f"{notes_collection(pair_id)}/{note_id}", None)

    async def find_by_pair(
        self, pair_id: PairId, owner_uid: PrincipalId | None = None
    ) -> list[Note]:
        """Find a pair's notes, most recently updated first."""
        notes = [
            note
            for note in self._store.list(notes_collection(pair_id))
            if owner_uid is None or note.owner_uid == owner_uid
        ]
        return sorted(notes, key=lambda n: n.updated_at, reverse=True)

    async def find_created_between(
        self, pair_id: PairId, start: datetime, end: datetime
    ) -> list[Note]:
        """Find notes created in ``[start, end)``, newest first."""
        notes = [
            note
            for note in self._store.list(notes_collection(pair_id))
            if start <= note.created_at < end
        ]
        return sorted(notes, key=lambda n: n.created_at, reverse=True)
