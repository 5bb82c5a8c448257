"""Pair and invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from pairnotes.application.usecase.pair import (
    AcceptInviteUseCase,
    BreakPairUseCase,
    CreateInviteUseCase,
    DeclineInviteUseCase,
    GetPairStatusUseCase,
    ListInvitesUseCase,
    SyncPairUseCase,
)
from pairnotes.application.usecase.pair.accept_invite import AcceptInviteRequest
from pairnotes.application.usecase.pair.break_pair import (
    BreakPairRequest,
    BreakPairResponse,
)
from pairnotes.application.usecase.pair.create_invite import CreateInviteRequest
from pairnotes.application.usecase.pair.decline_invite import DeclineInviteRequest
from pairnotes.application.usecase.pair.get_pair_status import (
    GetPairStatusRequest,
    PairItem,
    PairStatusResponse,
)
from pairnotes.application.usecase.pair.list_invites import (
    InviteItem,
    ListInvitesRequest,
    ListInvitesResponse,
)
from pairnotes.application.usecase.pair.sync_pair import (
    SyncPairRequest,
    SyncPairResponse,
)
from pairnotes.domain.service import JWTService
from pairnotes.domain.value import InviteStatus
from pairnotes.interface.api.dependencies import authenticate

router = APIRouter(prefix="/pair", tags=["pair"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """API request for inviting a partner."""

    partner_email: str


@router.get("", response_model=PairStatusResponse)
async def get_pair_status(
    get_pair_status_use_case: FromDishka[GetPairStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PairStatusResponse:
    """The caller's pairing state."""
    principal = authenticate(jwt_service, auth_token)
    return await get_pair_status_use_case.execute(
        GetPairStatusRequest(user_id=principal.id)
    )


@router.post(
    "/invites", response_model=InviteItem, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InviteItem:
    """Invite a partner by email.

    Example:
        POST /pair/invites
        {"partner_email": "bob@example.com"}

    Errors:
        400 invalid_input, 404 not_found (no such principal),
        409 duplicate_invite
    """
    principal = authenticate(jwt_service, auth_token)
    return await create_invite_use_case.execute(
        CreateInviteRequest(
            user_id=principal.id,
            email=principal.email,
            partner_email=request.partner_email,
        )
    )


@router.get("/invites", response_model=ListInvitesResponse)
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InviteStatus | None = Query(
        default=InviteStatus.PENDING, alias="status"
    ),
    all_statuses: bool = Query(default=False, alias="all"),
) -> ListInvitesResponse:
    """Incoming and outgoing invites, pending only unless asked otherwise."""
    principal = authenticate(jwt_service, auth_token)
    return await list_invites_use_case.execute(
        ListInvitesRequest(
            user_id=principal.id, status=None if all_statuses else status_filter
        )
    )


@router.post("/invites/{invite_id}/accept", response_model=PairItem)
async def accept_invite(
    invite_id: str,
    accept_invite_use_case: FromDishka[AcceptInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PairItem:
    """Accept an invite addressed to the caller.

    Errors:
        403 forbidden, 404 not_found, 409 already_processed / already_paired
    """
    principal = authenticate(jwt_service, auth_token)
    return await accept_invite_use_case.execute(
        AcceptInviteRequest(user_id=principal.id, invite_id=invite_id)
    )


@router.post("/invites/{invite_id}/decline", response_model=InviteItem)
async def decline_invite(
    invite_id: str,
    decline_invite_use_case: FromDishka[DeclineInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InviteItem:
    """Decline an invite addressed to the caller."""
    principal = authenticate(jwt_service, auth_token)
    return await decline_invite_use_case.execute(
        DeclineInviteRequest(user_id=principal.id, invite_id=invite_id)
    )


@router.post("/break", response_model=BreakPairResponse)
async def break_pair(
    break_pair_use_case: FromDishka[BreakPairUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> BreakPairResponse:
    """End the caller's pair. The partner's profile clears on its own side."""
    principal = authenticate(jwt_service, auth_token)
    return await break_pair_use_case.execute(BreakPairRequest(user_id=principal.id))


@router.post("/sync", response_model=SyncPairResponse)
async def sync_pair(
    sync_pair_use_case: FromDishka[SyncPairUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SyncPairResponse:
    """Run one pairing sync step now."""
    principal = authenticate(jwt_service, auth_token)
    return await sync_pair_use_case.execute(SyncPairRequest(user_id=principal.id))
