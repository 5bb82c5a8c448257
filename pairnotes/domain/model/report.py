"""Report entity - one per pair per reporting window."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.model.note import Note
from pairnotes.domain.value import NoteId, PairId, PrincipalId, ReportId, ReportStatus

MAX_SOURCE_NOTES = 200
MAX_SOURCE_NOTE_CHARS = 2000
MAX_ERROR_CHARS = 500


class ReportSourceNote(DomainModel):
    """Truncated copy of a note a report was generated from."""

    id: NoteId
    text: str = Field(max_length=MAX_SOURCE_NOTE_CHARS)
    owner_uid: PrincipalId
    updated_at: Optional[datetime] = None

    @classmethod
    def from_note(cls, note: Note) -> "ReportSourceNote":
        return cls(
            id=note.id,
            text=note.text[:MAX_SOURCE_NOTE_CHARS],
            owner_uid=note.owner_uid,
            updated_at=note.updated_at,
        )


class Report(DomainModel):
    """Report document.

    Lifecycle: created as ``generating`` by the caller that wins the claim
    transaction, then exactly one of ``ready`` or ``error``. A report that is
    ``ready`` or ``generating`` is never generated again.
    """

    id: ReportId
    pair_id: PairId
    status: ReportStatus
    created_at: datetime = Field(default_factory=utcnow)
    created_by: PrincipalId
    period_start: datetime
    period_end: datetime
    notes_count: Optional[int] = None
    summary: Optional[str] = None
    error: Optional[str] = None
    source_notes: list[ReportSourceNote] = Field(
        default_factory=list, max_length=MAX_SOURCE_NOTES
    )
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def blocks_generation(self) -> bool:
        """True when another attempt for this window must be skipped."""
        return self.status in (ReportStatus.READY, ReportStatus.GENERATING)
