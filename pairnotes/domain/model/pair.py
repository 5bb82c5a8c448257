"""Pair aggregate root - the canonical relationship record."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.value import PairId, PairStatus, PrincipalId


class Pair(DomainModel):
    """Canonical pair record keyed by the canonical pair ID.

    ``members`` is always stored sorted. A pair goes ``active`` -> ``ended``
    and may be reactivated by a later accepted invite for the same two
    principals, which clears ``ended_at`` and ``ended_by``.
    """

    id: PairId
    members: list[PrincipalId]
    status: PairStatus = PairStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)
    reactivated_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    ended_by: Optional[PrincipalId] = None

    @field_validator("members")
    @classmethod
    def sort_members(cls, v: list[PrincipalId]) -> list[PrincipalId]:
        """Keep members sorted and bounded to two principals."""
        if len(v) > 2:
            raise ValueError("A pair has at most two members")
        return sorted(v)

    @property
    def is_ended(self) -> bool:
        # Legacy records may carry ended_at without the status flip
        return self.status == PairStatus.ENDED or self.ended_at is not None

    def has_member(self, principal_id: PrincipalId) -> bool:
        return principal_id in self.members

    def partner_of(self, principal_id: PrincipalId) -> PrincipalId | None:
        """Return the other member, or None while it cannot be determined."""
        for member in self.members:
            if member != principal_id:
                return member
        return None
