"""Sync pair use case."""

import logfire
from pydantic import BaseModel

from pairnotes.domain.service import (
    InviteService,
    PairService,
    ProfileReconciler,
    ProfileService,
    ReconcileAction,
)
from pairnotes.domain.value import InviteStatus, PrincipalId

from .get_pair_status import PairStatusResponse


class SyncPairRequest(BaseModel):
    """Sync pair request."""

    user_id: str  # From authenticated user


class SyncPairResponse(BaseModel):
    """Sync pair response."""

    attached_invites: list[str]
    pair_ended: bool
    action: ReconcileAction
    status: PairStatusResponse


class SyncPairUseCase:
    """Use case for a one-shot pairing sync.

    Runs, once and in order, the steps a pair session runs continuously:
    attach accepted sent invites, drop a pair that has ended, and reconcile
    the profile with the active pair. For clients that open a pair-scoped
    view without holding a session.
    """

    def __init__(
        self,
        invite_service: InviteService,
        pair_service: PairService,
        profile_service: ProfileService,
        profile_reconciler: ProfileReconciler,
    ) -> None:
        """Initialize sync pair use case.

        Args:
            invite_service: Invite domain service
            pair_service: Pair domain service
            profile_service: Profile domain service
            profile_reconciler: Profile reconciler
        """
        self.invite_service = invite_service
        self.pair_service = pair_service
        self.profile_service = profile_service
        self.profile_reconciler = profile_reconciler

    async def execute(self, request: SyncPairRequest) -> SyncPairResponse:
        """Execute sync flow.

        Raises:
            NotFoundError: If the caller has no profile
        """
        me = PrincipalId(request.user_id)

        with logfire.span("sync_pair", principal_id=me):
            attached = []
            accepted = await self.invite_service.list_outgoing(
                me, InviteStatus.ACCEPTED
            )
            for invite in accepted:
                if await self.invite_service.attach_accepted_invite_as_sender(
                    me, invite.id
                ):
                    attached.append(invite.id)

            pair_ended = False
            profile = await self.profile_service.get_profile(me)
            if profile.pair_id:
                pair_ended = await self.pair_service.sync_ended_pair_on_open(
                    me, profile.pair_id
                )

            decision = await self.profile_reconciler.evaluate(me)

            profile = await self.profile_service.get_profile(me)
            active_pair = await self.pair_service.get_active_pair(me)

            return SyncPairResponse(
                attached_invites=attached,
                pair_ended=pair_ended,
                action=decision.action,
                status=PairStatusResponse.build(profile, active_pair),
            )
