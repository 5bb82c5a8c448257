"""Profile entity.

One profile per principal. The pairing fields are a denormalised cache of the
canonical pair record, kept in sync by the profile reconciler.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pairnotes.domain.model.common import DomainModel, utcnow
from pairnotes.domain.value import PairId, PrincipalId


class Profile(DomainModel):
    """Per-principal profile.

    Business rules:
    - Written only by its own principal (or the reconciler on its behalf)
    - ``pair_id``, ``partner_id`` and ``partner_email`` are derived state
    """

    id: PrincipalId
    email: Optional[str] = None
    name: Optional[str] = None
    pair_id: Optional[PairId] = None
    partner_id: Optional[PrincipalId] = None
    partner_email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def with_pairing(
        self,
        pair_id: PairId | None,
        partner_id: PrincipalId | None,
        partner_email: str | None,
        now: datetime,
    ) -> "Profile":
        """Return a copy with the pairing fields replaced."""
        return self.model_copy(
            update={
                "pair_id": pair_id,
                "partner_id": partner_id,
                "partner_email": partner_email,
                "updated_at": now,
            }
        )

    def cleared(self, now: datetime) -> "Profile":
        """Return a copy with every pairing field set to None."""
        return self.with_pairing(None, None, None, now)
