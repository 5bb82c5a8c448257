"""Pair invite entity.

An invite is a one-way proposal from ``from_uid`` to ``to_uid`` to form the
pair identified by ``pair_id``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.value import InviteId, InviteStatus, PairId, PrincipalId


class PairInvite(DomainModel):
    """Pair invite entity.

    Business rules:
    - ``pending`` -> ``accepted`` or ``declined``, by the recipient only
    - Terminal invites are immutable audit records; a new proposal gets a
      fresh ID
    """

    id: InviteId
    pair_id: PairId
    from_uid: PrincipalId
    to_uid: PrincipalId
    from_email: str
    to_email: str
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    accepted_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING
