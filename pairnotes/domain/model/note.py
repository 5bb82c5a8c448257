"""Note entity - pair-scoped content, input to report generation."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.value import NoteId, PairId, PrincipalId


class Note(DomainModel):
    """A note in a pair's notes collection."""

    id: NoteId
    pair_id: PairId
    text: str
    owner_uid: PrincipalId
    owner_name: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
