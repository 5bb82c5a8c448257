"""Break pair use case."""

from pydantic import BaseModel

from pairnotes.domain.service import PairService
from pairnotes.domain.value import PrincipalId

from .get_pair_status import PairItem


class BreakPairRequest(BaseModel):
    """Break pair request."""

    user_id: str  # From authenticated user


class BreakPairResponse(BaseModel):
    """Break pair response.

    ``pair`` is None when the pair record was already gone; the caller's
    profile is cleared either way.
    """

    pair: PairItem | None = None


class BreakPairUseCase:
    """Use case for ending the caller's pair."""

    def __init__(self, pair_service: PairService) -> None:
        self.pair_service = pair_service

    async def execute(self, request: BreakPairRequest) -> BreakPairResponse:
        """Execute break pair flow.

        Raises:
            NotInPairError: If the caller's profile has no pair
            ForbiddenError: If the caller is not a member of that pair
        """
        ended = await self.pair_service.break_pair(PrincipalId(request.user_id))
        return BreakPairResponse(pair=PairItem.from_pair(ended) if ended else None)
