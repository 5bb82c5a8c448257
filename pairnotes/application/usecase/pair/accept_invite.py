"""Accept invite use case."""

from pydantic import BaseModel

from pairnotes.domain.service import InviteService
from pairnotes.domain.value import InviteId, PrincipalId

from .get_pair_status import PairItem


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    user_id: str  # From authenticated user
    invite_id: str


class AcceptInviteUseCase:
    """Use case for accepting an invite addressed to the caller.

    The caller is paired immediately. The sender is paired by its own
    session once it observes the accepted invite.
    """

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: AcceptInviteRequest) -> PairItem:
        """Execute accept invite flow.

        Raises:
            NotFoundError: If the invite or the caller's profile is missing
            ForbiddenError: If the invite is not addressed to the caller
            AlreadyProcessedError: If the invite is no longer pending
            AlreadyPairedError: If the caller is already in a pair
        """
        pair = await self.invite_service.accept_invite(
            PrincipalId(request.user_id), InviteId(request.invite_id)
        )
        return PairItem.from_pair(pair)
