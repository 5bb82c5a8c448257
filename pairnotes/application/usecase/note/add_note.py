"""Add note use case."""

from pydantic import BaseModel, Field

from pairnotes.domain.service import NoteService
from pairnotes.domain.value import PrincipalId

from .list_notes import NoteItem


class AddNoteRequest(BaseModel):
    """Add note request."""

    user_id: str  # From authenticated user
    text: str = Field(max_length=10000)


class AddNoteUseCase:
    """Use case for adding a note to the caller's pair."""

    def __init__(self, note_service: NoteService) -> None:
        self.note_service = note_service

    async def execute(self, request: AddNoteRequest) -> NoteItem:
        """Raises NotInPairError without an active pair, InvalidInputError if blank."""
        note = await self.note_service.add(PrincipalId(request.user_id), request.text)
        return NoteItem.from_note(note)
