"""Get pair status use case."""

from datetime import datetime

from pydantic import BaseModel

from pairnotes.domain.model import Pair, Profile
from pairnotes.domain.service import PairService, ProfileService
from pairnotes.domain.value import PairStatus, PrincipalId


class PairItem(BaseModel):
    """Canonical pair record in response."""

    pair_id: str
    members: list[str]
    status: PairStatus
    created_at: datetime
    reactivated_at: datetime | None = None
    ended_at: datetime | None = None
    ended_by: str | None = None

    @classmethod
    def from_pair(cls, pair: Pair) -> "PairItem":
        return cls(
            pair_id=pair.id,
            members=list(pair.members),
            status=pair.status,
            created_at=pair.created_at,
            reactivated_at=pair.reactivated_at,
            ended_at=pair.ended_at,
            ended_by=pair.ended_by,
        )


class GetPairStatusRequest(BaseModel):
    """Get pair status request."""

    user_id: str  # From authenticated user


class PairStatusResponse(BaseModel):
    """The caller's pairing as cached on its profile, plus the active pair.

    ``pair`` is read from the canonical records and may briefly disagree
    with the profile fields until the reconciler catches up.
    """

    in_pair: bool
    pair_id: str | None = None
    partner_id: str | None = None
    partner_email: str | None = None
    pair: PairItem | None = None

    @classmethod
    def build(cls, profile: Profile, active_pair: Pair | None) -> "PairStatusResponse":
        return cls(
            in_pair=profile.pair_id is not None,
            pair_id=profile.pair_id,
            partner_id=profile.partner_id,
            partner_email=profile.partner_email,
            pair=PairItem.from_pair(active_pair) if active_pair else None,
        )


class GetPairStatusUseCase:
    """Use case for reading the caller's pairing state."""

    def __init__(
        self, profile_service: ProfileService, pair_service: PairService
    ) -> None:
        self.profile_service = profile_service
        self.pair_service = pair_service

    async def execute(self, request: GetPairStatusRequest) -> PairStatusResponse:
        """Raises NotFoundError if the caller has no profile."""
        me = PrincipalId(request.user_id)
        profile = await self.profile_service.get_profile(me)
        active_pair = await self.pair_service.get_active_pair(me)
        return PairStatusResponse.build(profile, active_pair)
