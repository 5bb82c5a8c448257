"""Update note use case."""

from pydantic import BaseModel, Field

from pairnotes.domain.service import NoteService
from pairnotes.domain.value import NoteId, PrincipalId

from .list_notes import NoteItem


class UpdateNoteRequest(BaseModel):
    """Update note request."""

    user_id: str  # From authenticated user
    note_id: str
    text: str = Field(max_length=10000)


class UpdateNoteUseCase:
    """Use case for editing one of the caller's notes."""

    def __init__(self, note_service: NoteService) -> None:
        self.note_service = note_service

    async def execute(self, request: UpdateNoteRequest) -> NoteItem:
        note = await self.note_service.update(
            PrincipalId(request.user_id), NoteId(request.note_id), request.text
        )
        return NoteItem.from_note(note)
