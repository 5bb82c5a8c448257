"""Unit tests for background pair sessions."""

import asyncio

import pytest

from pairnotes.application.session import SessionRegistry
from pairnotes.config import ReportSettings
from pairnotes.domain.model import Report, Schedule
from pairnotes.domain.repository import (
    NoteRepository,
    PairRepository,
    ProfileRepository,
    ReportRepository,
    TransactionRunner,
)
from pairnotes.domain.service import (
    InviteService,
    PairService,
    ProfileReconciler,
    ReportScheduler,
    ReportService,
    Summarizer,
)
from tests.conftest import eventually, make_principal, pair_up, register
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = make_principal("alice")
BOB = make_principal("bob")


class BrokenReportService(ReportService):
    """Report service whose generation always fails outside the domain errors."""

    calls = 0

    async def generate(self, schedule: Schedule) -> Report | None:
        self.calls += 1
        raise RuntimeError("summarizer client crashed")


async def build_registry(env, report_settings: ReportSettings) -> SessionRegistry:
    """Registry whose scheduler uses ``report_settings`` instead of the env's."""
    return SessionRegistry(
        profile_reconciler=await env.get(ProfileReconciler),
        invite_service=await env.get(InviteService),
        report_scheduler=ReportScheduler(
            report_settings=report_settings,
            pair_repository=await env.get(PairRepository),
        ),
        report_service=await env.get(ReportService),
        report_settings=report_settings,
    )


class TestSessionRegistry:
    """Tests for SessionRegistry lifecycle."""

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, unit_env):
        registry = await unit_env.get(SessionRegistry)

        first = await registry.start(ALICE)
        second = await registry.start(ALICE)

        assert first is second
        assert first.running
        assert registry.get(ALICE.id) is first

    @pytest.mark.asyncio
    async def test_stop_cancels_loops(self, unit_env):
        registry = await unit_env.get(SessionRegistry)
        session = await registry.start(ALICE)

        await registry.stop(ALICE.id)

        assert not session.running
        assert registry.get(ALICE.id) is None

    @pytest.mark.asyncio
    async def test_stop_unknown_principal_is_noop(self, unit_env):
        registry = await unit_env.get(SessionRegistry)

        await registry.stop(ALICE.id)

        assert registry.get(ALICE.id) is None

    @pytest.mark.asyncio
    async def test_stop_all(self, unit_env):
        registry = await unit_env.get(SessionRegistry)
        alice_session = await registry.start(ALICE)
        bob_session = await registry.start(BOB)

        await registry.stop_all()

        assert not alice_session.running
        assert not bob_session.running


class TestPairSession:
    """Tests for what a running session does."""

    @pytest.mark.asyncio
    async def test_sender_attached_when_invite_accepted(self, unit_env):
        """The sender's session pairs it once the recipient accepts."""
        # Arrange
        registry = await unit_env.get(SessionRegistry)
        invite_service = await unit_env.get(InviteService)
        profile_repo = await unit_env.get(ProfileRepository)
        await register(unit_env, ALICE)
        await register(unit_env, BOB)
        await registry.start(ALICE)

        # Act
        invite = await invite_service.create_invite(ALICE, BOB.email)
        pair = await invite_service.accept_invite(BOB.id, invite.id)

        # Assert
        async def alice_paired():
            profile = await profile_repo.find_by_id(ALICE.id)
            return profile.pair_id == pair.id and profile.partner_id == BOB.id

        await eventually(alice_paired)

    @pytest.mark.asyncio
    async def test_partner_cleared_when_pair_broken(self, unit_env):
        # Arrange
        registry = await unit_env.get(SessionRegistry)
        pair_service = await unit_env.get(PairService)
        profile_repo = await unit_env.get(ProfileRepository)
        await pair_up(unit_env, ALICE, BOB)
        await registry.start(BOB)

        # Act
        await pair_service.break_pair(ALICE.id)

        # Assert
        async def bob_cleared():
            return (await profile_repo.find_by_id(BOB.id)).pair_id is None

        await eventually(bob_cleared)

    @pytest.mark.asyncio
    async def test_auto_generate_once_per_window(self, unit_env):
        """With auto-generation on, a due window is generated exactly once."""
        # Arrange
        settings = ReportSettings(auto_generate=True, shift_weeks=-1, tick_seconds=0.02)
        registry = await build_registry(unit_env, settings)
        summarizer = await unit_env.get(Summarizer)
        report_repo = await unit_env.get(ReportRepository)
        pair = await pair_up(unit_env, ALICE, BOB)
        scheduler = ReportScheduler(settings, await unit_env.get(PairRepository))
        schedule = await scheduler.current(ALICE.id)

        try:
            # Act
            await registry.start(ALICE)
            await registry.start(BOB)

            # Assert
            async def report_ready():
                report = await report_repo.find_by_id(pair.id, schedule.report_id)
                return report is not None and report.status == "ready"

            await eventually(report_ready)
            # Let a few more ticks pass
            await asyncio.sleep(0.1)
            assert len(summarizer.calls) == 1
        finally:
            await registry.stop_all()

    @pytest.mark.asyncio
    async def test_auto_generate_off_by_default(self, unit_env):
        registry = await unit_env.get(SessionRegistry)
        summarizer = await unit_env.get(Summarizer)
        await pair_up(unit_env, ALICE, BOB)

        session = await registry.start(ALICE)
        await asyncio.sleep(0.05)

        assert session.auto_generate is False
        assert summarizer.calls == []

    @pytest.mark.asyncio
    async def test_auto_generate_survives_unexpected_error(self, unit_env):
        """A non-domain failure is logged and the loop keeps watching."""
        # Arrange
        settings = ReportSettings(auto_generate=True, shift_weeks=-1, tick_seconds=0.02)
        report_service = BrokenReportService(
            report_repository=await unit_env.get(ReportRepository),
            note_repository=await unit_env.get(NoteRepository),
            transactions=await unit_env.get(TransactionRunner),
            summarizer=await unit_env.get(Summarizer),
        )
        registry = SessionRegistry(
            profile_reconciler=await unit_env.get(ProfileReconciler),
            invite_service=await unit_env.get(InviteService),
            report_scheduler=ReportScheduler(
                report_settings=settings,
                pair_repository=await unit_env.get(PairRepository),
            ),
            report_service=report_service,
            report_settings=settings,
        )
        await pair_up(unit_env, ALICE, BOB)

        try:
            # Act
            await registry.start(ALICE)

            async def attempted():
                return report_service.calls == 1

            await eventually(attempted)
            # Let a few more ticks pass
            await asyncio.sleep(0.1)

            # Assert
            loops = {
                task.get_name(): task
                for task in asyncio.all_tasks()
                if task.get_name().startswith(f"pair-session:{ALICE.id}:")
            }
            assert not loops[f"pair-session:{ALICE.id}:auto_generate"].done()
            assert report_service.calls == 1
        finally:
            await registry.stop_all()
