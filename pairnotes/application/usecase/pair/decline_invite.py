"""Decline invite use case."""

from pydantic import BaseModel

from pairnotes.domain.service import InviteService
from pairnotes.domain.value import InviteId, PrincipalId

from .list_invites import InviteItem


class DeclineInviteRequest(BaseModel):
    """Decline invite request."""

    user_id: str  # From authenticated user
    invite_id: str


class DeclineInviteUseCase:
    """Use case for declining an invite addressed to the caller."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: DeclineInviteRequest) -> InviteItem:
        declined = await self.invite_service.decline_invite(
            PrincipalId(request.user_id), InviteId(request.invite_id)
        )
        return InviteItem.from_invite(declined)
