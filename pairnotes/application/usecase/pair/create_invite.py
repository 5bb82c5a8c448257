"""Create invite use case."""

from pydantic import BaseModel

from pairnotes.domain.model import Principal
from pairnotes.domain.service import InviteService
from pairnotes.domain.value import PrincipalId

from .list_invites import InviteItem


class CreateInviteRequest(BaseModel):
    """Create invite request."""

    user_id: str  # From authenticated user
    email: str | None = None  # From authenticated user
    partner_email: str


class CreateInviteUseCase:
    """Use case for inviting another principal, by email, to pair."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: CreateInviteRequest) -> InviteItem:
        """Execute create invite flow.

        Raises:
            InvalidInputError: If the partner email is empty, malformed or the
                caller's own
            NotFoundError: If no principal is registered under that email
            DuplicateInviteError: If a pending invite exists in either direction
        """
        me = Principal(id=PrincipalId(request.user_id), email=request.email)
        invite = await self.invite_service.create_invite(me, request.partner_email)
        return InviteItem.from_invite(invite)
