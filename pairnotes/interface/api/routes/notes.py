"""Note routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from pairnotes.application.usecase.note import (
    AddNoteUseCase,
    ListNotesUseCase,
    RemoveNoteUseCase,
    UpdateNoteUseCase,
)
from pairnotes.application.usecase.note.add_note import AddNoteRequest
from pairnotes.application.usecase.note.list_notes import (
    ListNotesRequest,
    ListNotesResponse,
    NoteItem,
)
from pairnotes.application.usecase.note.remove_note import RemoveNoteRequest
from pairnotes.application.usecase.note.update_note import UpdateNoteRequest
from pairnotes.domain.service import JWTService
from pairnotes.interface.api.dependencies import authenticate

router = APIRouter(prefix="/notes", tags=["notes"], route_class=DishkaRoute)


class NoteAPIRequest(BaseModel):
    """API request body for adding or editing a note."""

    text: str = Field(max_length=10000)


@router.get("", response_model=ListNotesResponse)
async def list_notes(
    list_notes_use_case: FromDishka[ListNotesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListNotesResponse:
    """The caller's notes in its pair."""
    principal = authenticate(jwt_service, auth_token)
    return await list_notes_use_case.execute(ListNotesRequest(user_id=principal.id))


@router.post("", response_model=NoteItem, status_code=status.HTTP_201_CREATED)
async def add_note(
    request: NoteAPIRequest,
    add_note_use_case: FromDishka[AddNoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> NoteItem:
    """Add a note. Requires an active pair (412 not_in_pair otherwise)."""
    principal = authenticate(jwt_service, auth_token)
    return await add_note_use_case.execute(
        AddNoteRequest(user_id=principal.id, text=request.text)
    )


@router.patch("/{note_id}", response_model=NoteItem)
async def update_note(
    note_id: str,
    request: NoteAPIRequest,
    update_note_use_case: FromDishka[UpdateNoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> NoteItem:
    principal = authenticate(jwt_service, auth_token)
    return await update_note_use_case.execute(
        UpdateNoteRequest(user_id=principal.id, note_id=note_id, text=request.text)
    )


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_note(
    note_id: str,
    remove_note_use_case: FromDishka[RemoveNoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    principal = authenticate(jwt_service, auth_token)
    await remove_note_use_case.execute(
        RemoveNoteRequest(user_id=principal.id, note_id=note_id)
    )
