"""Note repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from pairnotes.domain.model.note import Note
from pairnotes.domain.value import NoteId, PairId, PrincipalId


class NoteRepository(ABC):
    """Repository for pair-scoped notes (``pairs/{pairId}/notes/{noteId}``)."""

    @abstractmethod
    async def find_by_id(self, pair_id: PairId, note_id: NoteId) -> Note | None:
        """Find a note in a pair."""
        pass

    @abstractmethod
    async def save(self, note: Note) -> Note:
        """Save a note (create or replace)."""
        pass

    @abstractmethod
    async def delete(self, pair_id: PairId, note_id: NoteId) -> None:
        """Delete a note. Deleting a missing note is a no-op."""
        pass

    @abstractmethod
    async def find_by_pair(
        self, pair_id: PairId, owner_uid: PrincipalId | None = None
    ) -> list[Note]:
        """Find a pair's notes, optionally one owner's, most recently updated first."""
        pass

    @abstractmethod
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
        pass
