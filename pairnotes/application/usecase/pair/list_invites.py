"""List invites use case."""

from datetime import datetime

from pydantic import BaseModel

from pairnotes.domain.model import PairInvite
from pairnotes.domain.service import InviteService
from pairnotes.domain.value import InviteStatus, PrincipalId


class InviteItem(BaseModel):
    """Invite item in response."""

    invite_id: str
    pair_id: str
    from_uid: str
    to_uid: str
    from_email: str
    to_email: str
    status: InviteStatus
    created_at: datetime
    accepted_at: datetime | None = None

    @classmethod
    def from_invite(cls, invite: PairInvite) -> "InviteItem":
        return cls(
            invite_id=invite.id,
            pair_id=invite.pair_id,
            from_uid=invite.from_uid,
            to_uid=invite.to_uid,
            from_email=invite.from_email,
            to_email=invite.to_email,
            status=invite.status,
            created_at=invite.created_at,
            accepted_at=invite.accepted_at,
        )


class ListInvitesRequest(BaseModel):
    """List invites request."""

    user_id: str  # From authenticated user
    status: InviteStatus | None = InviteStatus.PENDING  # None = any status


class ListInvitesResponse(BaseModel):
    """Invites addressed to and sent by the caller."""

    incoming: list[InviteItem]
    outgoing: list[InviteItem]


class ListInvitesUseCase:
    """Use case for listing the caller's invites in both directions."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        me = PrincipalId(request.user_id)
        incoming = await self.invite_service.list_incoming(me, request.status)
        outgoing = await self.invite_service.list_outgoing(me, request.status)
        return ListInvitesResponse(
            incoming=[InviteItem.from_invite(i) for i in incoming],
            outgoing=[InviteItem.from_invite(i) for i in outgoing],
        )
