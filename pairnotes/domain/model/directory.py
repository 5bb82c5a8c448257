"""Public directory entry.

Exposes only email and display name so a partner can be found by email
without reading their full profile.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.value import PrincipalId


class DirectoryEntry(DomainModel):
    """Public directory entry, keyed by principal ID."""

    id: PrincipalId
    email: str
    name: Optional[str] = None
    updated_at: datetime = Field(default_factory=utcnow)
