"""Domain value objects for pairnotes."""

from pairnotes.domain.value.identifiers import (
    InviteId,
    NoteId,
    PairId,
    PrincipalId,
    ReportId,
    canonical_pair_id,
    new_invite_id,
    new_note_id,
)
from pairnotes.domain.value.types import (
    Email,
    InviteStatus,
    PairStatus,
    ReportStatus,
)

__all__ = [
    # Identifiers
    "PrincipalId",
    "PairId",
    "InviteId",
    "NoteId",
    "ReportId",
    "canonical_pair_id",
    "new_invite_id",
    "new_note_id",
    # Types
    "Email",
    "InviteStatus",
    "PairStatus",
    "ReportStatus",
]
