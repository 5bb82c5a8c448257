"""Remove note use case."""

from pydantic import BaseModel

from pairnotes.domain.service import NoteService
from pairnotes.domain.value import NoteId, PrincipalId


class RemoveNoteRequest(BaseModel):
    """Remove note request."""

    user_id: str  # From authenticated user
    note_id: str


class RemoveNoteUseCase:
    """Use case for deleting one of the caller's notes."""

    def __init__(self, note_service: NoteService) -> None:
        self.note_service = note_service

    async def execute(self, request: RemoveNoteRequest) -> None:
        await self.note_service.remove(
            PrincipalId(request.user_id), NoteId(request.note_id)
        )
