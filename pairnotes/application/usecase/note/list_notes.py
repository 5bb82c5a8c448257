"""List notes use case."""

from datetime import datetime

from pydantic import BaseModel

from pairnotes.domain.model import Note
from pairnotes.domain.service import NoteService
from pairnotes.domain.value import PrincipalId


class NoteItem(BaseModel):
    """Note item in response."""

    note_id: str
    pair_id: str
    text: str
    owner_uid: str
    owner_name: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_note(cls, note: Note) -> "NoteItem":
        return cls(
            note_id=note.id,
            pair_id=note.pair_id,
            text=note.text,
            owner_uid=note.owner_uid,
            owner_name=note.owner_name,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class ListNotesRequest(BaseModel):
    """List notes request."""

    user_id: str  # From authenticated user


class ListNotesResponse(BaseModel):
    """List notes response."""

    notes: list[NoteItem]
    total: int


class ListNotesUseCase:
    """Use case for listing the caller's notes in its pair."""

    def __init__(self, note_service: NoteService) -> None:
        self.note_service = note_service

    async def execute(self, request: ListNotesRequest) -> ListNotesResponse:
        notes = await self.note_service.list_mine(PrincipalId(request.user_id))
        return ListNotesResponse(
            notes=[NoteItem.from_note(n) for n in notes], total=len(notes)
        )
