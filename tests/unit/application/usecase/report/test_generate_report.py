"""Unit tests for the report use cases."""

import pytest

from pairnotes.application.usecase.report import (
    GenerateReportUseCase,
    GetCurrentReportUseCase,
    GetScheduleUseCase,
)
from pairnotes.application.usecase.report.generate_report import GenerateReportRequest
from pairnotes.application.usecase.report.get_current_report import (
    GetCurrentReportRequest,
)
from pairnotes.application.usecase.report.get_schedule import GetScheduleRequest
from pairnotes.config import ReportSettings
from pairnotes.domain.error import NotDueYetError, NotInPairError
from pairnotes.domain.repository import PairRepository
from pairnotes.domain.service import ReportScheduler, ReportService
from pairnotes.domain.value import ReportStatus
from tests.conftest import make_principal, pair_up, register
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = make_principal("alice")
BOB = make_principal("bob")


async def scheduler_with(env, **settings) -> ReportScheduler:
    return ReportScheduler(
        report_settings=ReportSettings(**settings),
        pair_repository=await env.get(PairRepository),
    )


class TestGenerateReportUseCase:
    """Tests for GenerateReportUseCase."""

    @pytest.mark.asyncio
    async def test_generate_due_window(self, unit_env):
        """Last week's window is always closed, so it can be generated."""
        # Arrange
        use_case = GenerateReportUseCase(
            report_scheduler=await scheduler_with(unit_env, shift_weeks=-1),
            report_service=await unit_env.get(ReportService),
        )
        pair = await pair_up(unit_env, ALICE, BOB)

        # Act
        response = await use_case.execute(GenerateReportRequest(user_id=ALICE.id))

        # Assert
        assert response.generated is True
        assert response.report.status == ReportStatus.READY
        assert response.report.pair_id == pair.id
        assert response.report.created_by == ALICE.id

    @pytest.mark.asyncio
    async def test_second_call_returns_existing_report(self, unit_env):
        """The partner's later call is a skip that still shows the report."""
        # Arrange
        use_case = GenerateReportUseCase(
            report_scheduler=await scheduler_with(unit_env, shift_weeks=-1),
            report_service=await unit_env.get(ReportService),
        )
        await pair_up(unit_env, ALICE, BOB)
        first = await use_case.execute(GenerateReportRequest(user_id=ALICE.id))

        # Act
        second = await use_case.execute(GenerateReportRequest(user_id=BOB.id))

        # Assert
        assert second.generated is False
        assert second.report.report_id == first.report.report_id
        assert second.report.status == ReportStatus.READY

    @pytest.mark.asyncio
    async def test_generate_outside_pair(self, unit_env):
        use_case = await unit_env.get(GenerateReportUseCase)
        await register(unit_env, ALICE)

        with pytest.raises(NotInPairError):
            await use_case.execute(GenerateReportRequest(user_id=ALICE.id))

    @pytest.mark.asyncio
    async def test_generate_open_window(self, unit_env):
        """Next week's window has not closed yet."""
        use_case = GenerateReportUseCase(
            report_scheduler=await scheduler_with(unit_env, shift_weeks=1),
            report_service=await unit_env.get(ReportService),
        )
        await pair_up(unit_env, ALICE, BOB)

        with pytest.raises(NotDueYetError):
            await use_case.execute(GenerateReportRequest(user_id=ALICE.id))


class TestScheduleAndCurrentReport:
    """Tests for GetScheduleUseCase and GetCurrentReportUseCase."""

    @pytest.mark.asyncio
    async def test_schedule_outside_pair(self, unit_env):
        use_case = await unit_env.get(GetScheduleUseCase)
        await register(unit_env, ALICE)

        schedule = await use_case.execute(GetScheduleRequest(user_id=ALICE.id))

        assert schedule.in_pair is False
        assert schedule.due is False
        assert schedule.next_at is not None

    @pytest.mark.asyncio
    async def test_current_report_after_generation(self, unit_env):
        # Arrange
        scheduler = await scheduler_with(unit_env, shift_weeks=-1)
        report_service = await unit_env.get(ReportService)
        await pair_up(unit_env, ALICE, BOB)
        await GenerateReportUseCase(scheduler, report_service).execute(
            GenerateReportRequest(user_id=BOB.id)
        )
        use_case = GetCurrentReportUseCase(
            report_scheduler=scheduler, report_service=report_service
        )

        # Act
        response = await use_case.execute(GetCurrentReportRequest(user_id=ALICE.id))

        # Assert
        assert response.schedule.in_pair is True
        assert response.schedule.due is True
        assert response.report.report_id == response.schedule.report_id
        assert response.report.summary == "Mock summary"

    @pytest.mark.asyncio
    async def test_current_report_none_before_generation(self, unit_env):
        use_case = await unit_env.get(GetCurrentReportUseCase)
        await pair_up(unit_env, ALICE, BOB)

        response = await use_case.execute(GetCurrentReportRequest(user_id=ALICE.id))

        assert response.report is None
