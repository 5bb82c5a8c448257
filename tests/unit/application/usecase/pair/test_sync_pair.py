"""Unit tests for the pair use cases."""

import pytest

from pairnotes.application.usecase.pair import (
    BreakPairUseCase,
    GetPairStatusUseCase,
    ListInvitesUseCase,
    SyncPairUseCase,
)
from pairnotes.application.usecase.pair.break_pair import BreakPairRequest
from pairnotes.application.usecase.pair.get_pair_status import GetPairStatusRequest
from pairnotes.application.usecase.pair.list_invites import ListInvitesRequest
from pairnotes.application.usecase.pair.sync_pair import SyncPairRequest
from pairnotes.domain.service import InviteService, PairService, ReconcileAction
from pairnotes.domain.value import InviteStatus, PairStatus
from tests.conftest import make_principal, pair_up, register
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = make_principal("alice")
BOB = make_principal("bob")


class TestSyncPairUseCase:
    """Tests for SyncPairUseCase."""

    @pytest.mark.asyncio
    async def test_sync_attaches_accepted_invite(self, unit_env):
        """A sender without a session catches up on its accepted invite."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        sync_pair = await unit_env.get(SyncPairUseCase)
        await register(unit_env, ALICE)
        await register(unit_env, BOB)
        invite = await invite_service.create_invite(ALICE, BOB.email)
        pair = await invite_service.accept_invite(BOB.id, invite.id)

        # Act
        response = await sync_pair.execute(SyncPairRequest(user_id=ALICE.id))

        # Assert
        assert response.attached_invites == [invite.id]
        assert response.pair_ended is False
        assert response.action == ReconcileAction.NONE
        assert response.status.in_pair is True
        assert response.status.pair_id == pair.id
        assert response.status.partner_email == "bob@example.com"
        assert response.status.pair.status == PairStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_sync_clears_ended_pair(self, unit_env):
        # Arrange
        pair_service = await unit_env.get(PairService)
        sync_pair = await unit_env.get(SyncPairUseCase)
        await pair_up(unit_env, ALICE, BOB)
        await pair_service.break_pair(ALICE.id)

        # Act
        response = await sync_pair.execute(SyncPairRequest(user_id=BOB.id))

        # Assert
        assert response.pair_ended is True
        assert response.status.in_pair is False
        assert response.status.pair is None

    @pytest.mark.asyncio
    async def test_sync_converged_is_noop(self, unit_env):
        sync_pair = await unit_env.get(SyncPairUseCase)
        await pair_up(unit_env, ALICE, BOB)

        response = await sync_pair.execute(SyncPairRequest(user_id=ALICE.id))

        assert response.attached_invites == []
        assert response.pair_ended is False
        assert response.action == ReconcileAction.NONE


class TestPairStatusAndBreak:
    """Tests for GetPairStatusUseCase and BreakPairUseCase."""

    @pytest.mark.asyncio
    async def test_status_in_pair(self, unit_env):
        get_status = await unit_env.get(GetPairStatusUseCase)
        pair = await pair_up(unit_env, ALICE, BOB)

        status = await get_status.execute(GetPairStatusRequest(user_id=BOB.id))

        assert status.in_pair is True
        assert status.partner_id == ALICE.id
        assert status.pair.pair_id == pair.id
        assert status.pair.members == sorted([ALICE.id, BOB.id])

    @pytest.mark.asyncio
    async def test_break_returns_ended_pair(self, unit_env):
        break_pair = await unit_env.get(BreakPairUseCase)
        await pair_up(unit_env, ALICE, BOB)

        response = await break_pair.execute(BreakPairRequest(user_id=ALICE.id))

        assert response.pair.status == PairStatus.ENDED
        assert response.pair.ended_by == ALICE.id


class TestListInvitesUseCase:
    """Tests for ListInvitesUseCase."""

    @pytest.mark.asyncio
    async def test_lists_both_directions(self, unit_env):
        # Arrange
        invite_service = await unit_env.get(InviteService)
        list_invites = await unit_env.get(ListInvitesUseCase)
        await register(unit_env, ALICE)
        await register(unit_env, BOB)
        invite = await invite_service.create_invite(ALICE, BOB.email)

        # Act
        alice_view = await list_invites.execute(ListInvitesRequest(user_id=ALICE.id))
        bob_view = await list_invites.execute(ListInvitesRequest(user_id=BOB.id))

        # Assert
        assert alice_view.incoming == []
        assert [i.invite_id for i in alice_view.outgoing] == [invite.id]
        assert [i.invite_id for i in bob_view.incoming] == [invite.id]
        assert bob_view.incoming[0].from_email == "alice@example.com"
        assert bob_view.incoming[0].status == InviteStatus.PENDING
