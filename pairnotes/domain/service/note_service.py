"""Pair-scoped notes domain service."""

import logfire

from pairnotes.domain.error import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    NotInPairError,
)
from pairnotes.domain.model import Note, Pair
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import (
    NoteRepository,
    PairRepository,
    ProfileRepository,
)
from pairnotes.domain.value import NoteId, PrincipalId, new_note_id

from .base import Service


class NoteService(Service):
    """Domain service for notes in the caller's active pair.

    Business rules:
    - The caller's profile must point at an active pair it belongs to
    - Only a note's owner may edit or delete it
    """

    def __init__(
        self,
        note_repository: NoteRepository,
        profile_repository: ProfileRepository,
        pair_repository: PairRepository,
    ) -> None:
        """Initialize note service.

        Args:
            note_repository: Note repository
            profile_repository: Profile repository (current pair and name)
            pair_repository: Pair read side (active check)
        """
        self.note_repository = note_repository
        self.profile_repository = profile_repository
        self.pair_repository = pair_repository

    async def _active_pair(self, me: PrincipalId) -> Pair:
        profile = await self.profile_repository.find_by_id(me)
        if profile is None or not profile.pair_id:
            raise NotInPairError("You are not in a pair")
        pair = await self.pair_repository.find_by_id(profile.pair_id)
        if pair is None or pair.is_ended or not pair.has_member(me):
            raise NotInPairError("Your pair is no longer active")
        return pair

    async def _owned_note(self, me: PrincipalId, note_id: NoteId) -> Note:
        pair = await self._active_pair(me)
        note = await self.note_repository.find_by_id(pair.id, note_id)
        if note is None:
            raise NotFoundError("Note", note_id)
        if note.owner_uid != me:
            raise ForbiddenError("Note", note_id, me)
        return note

    async def add(self, me: PrincipalId, text: str) -> Note:
        """Add a note to the caller's pair.

        Raises:
            InvalidInputError: If the text is blank
            NotInPairError: If the caller has no active pair
        """
        with logfire.span("note_service.add", principal_id=me):
            if not text.strip():
                raise InvalidInputError("Note text is required")
            pair = await self._active_pair(me)
            profile = await self.profile_repository.find_by_id(me)
            now = utcnow()
            note = Note(
                id=new_note_id(),
                pair_id=pair.id,
                text=text,
                owner_uid=me,
                owner_name=profile.name if profile else None,
                created_at=now,
                updated_at=now,
            )
            saved = await self.note_repository.save(note)
            logfire.info("Note added", note_id=saved.id, pair_id=pair.id)
            return saved

    async def update(self, me: PrincipalId, note_id: NoteId, text: str) -> Note:
        """Replace the text of one of the caller's notes.

        Raises:
            InvalidInputError: If the text is blank
            NotInPairError: If the caller has no active pair
            NotFoundError: If the note does not exist in the pair
            ForbiddenError: If the caller does not own the note
        """
        with logfire.span("note_service.update", principal_id=me, note_id=note_id):
            if not text.strip():
                raise InvalidInputError("Note text is required")
            note = await self._owned_note(me, note_id)
            updated = note.model_copy(update={"text": text, "updated_at": utcnow()})
            return await self.note_repository.save(updated)

    async def remove(self, me: PrincipalId, note_id: NoteId) -> None:
        """Delete one of the caller's notes.

        Raises:
            NotInPairError: If the caller has no active pair
            NotFoundError: If the note does not exist in the pair
            ForbiddenError: If the caller does not own the note
        """
        with logfire.span("note_service.remove", principal_id=me, note_id=note_id):
            note = await self._owned_note(me, note_id)
            await self.note_repository.delete(note.pair_id, note.id)
            logfire.info("Note removed", note_id=note_id, pair_id=note.pair_id)

    async def list_mine(self, me: PrincipalId) -> list[Note]:
        """The caller's notes in its pair, most recently updated first."""
        pair = await self._active_pair(me)
        return await self.note_repository.find_by_pair(pair.id, owner_uid=me)
