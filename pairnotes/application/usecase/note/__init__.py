"""Note use cases."""

from .add_note import AddNoteUseCase
from .list_notes import ListNotesUseCase
from .remove_note import RemoveNoteUseCase
from .update_note import UpdateNoteUseCase

__all__ = [
    "AddNoteUseCase",
    "ListNotesUseCase",
    "RemoveNoteUseCase",
    "UpdateNoteUseCase",
]
