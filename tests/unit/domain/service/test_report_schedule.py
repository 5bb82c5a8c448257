"""Unit tests for reporting windows and schedules."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from pairnotes.config import ReportPeriodOverride, ReportSettings
from pairnotes.domain.model import Pair
from pairnotes.domain.service import ReportScheduler, compute_period, report_id_from_period
from pairnotes.domain.value import PairId, PrincipalId
from pairnotes.util.error import ConfigurationError
from tests.conftest import make_principal, pair_up, utc
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

# Default policy closes Fridays at 18:00 Moscow time, i.e. 15:00 UTC
WEDNESDAY = utc(2026, 2, 18, 12, 0)
SATURDAY = utc(2026, 2, 21, 10, 0)
SUNDAY = utc(2026, 2, 22, 20, 0)
FRIDAY_CLOSE = utc(2026, 2, 20, 15, 0)
PREVIOUS_CLOSE = utc(2026, 2, 13, 15, 0)
NEXT_CLOSE = utc(2026, 2, 27, 15, 0)


class TestComputePeriodWeekly:
    """Tests for the weekly window rule."""

    def test_midweek_window_is_not_due(self):
        period = compute_period(WEDNESDAY, ReportSettings())

        assert period.slot_start == PREVIOUS_CLOSE
        assert period.slot_end == FRIDAY_CLOSE
        assert period.next_at == FRIDAY_CLOSE
        assert period.due is False
        assert period.ms_to_next == int(timedelta(days=2, hours=3).total_seconds() * 1000)

    def test_saturday_window_is_due(self):
        """On the weekend the window that just closed is the current one."""
        period = compute_period(SATURDAY, ReportSettings())

        assert period.slot_start == PREVIOUS_CLOSE
        assert period.slot_end == FRIDAY_CLOSE
        assert period.due is True
        assert period.next_at == NEXT_CLOSE

    def test_sunday_resolves_to_the_friday_just_passed(self):
        period = compute_period(SUNDAY, ReportSettings())

        assert period.slot_end == FRIDAY_CLOSE
        assert period.due is True

    def test_friday_before_close_is_not_due(self):
        period = compute_period(FRIDAY_CLOSE - timedelta(minutes=1), ReportSettings())

        assert period.slot_end == FRIDAY_CLOSE
        assert period.due is False
        assert period.ms_to_next == 60_000

    def test_exactly_at_close_is_due(self):
        period = compute_period(FRIDAY_CLOSE, ReportSettings())

        assert period.due is True
        assert period.next_at == NEXT_CLOSE

    def test_window_is_seven_days(self):
        period = compute_period(WEDNESDAY, ReportSettings())

        assert period.slot_end - period.slot_start == timedelta(days=7)

    def test_shift_weeks_moves_window_back(self):
        """A shift of -1 makes last week's window current, so it is due."""
        period = compute_period(WEDNESDAY, ReportSettings(shift_weeks=-1))

        assert period.slot_end == PREVIOUS_CLOSE
        assert period.slot_start == PREVIOUS_CLOSE - timedelta(days=7)
        assert period.due is True
        assert period.next_at == FRIDAY_CLOSE

    def test_naive_now_is_taken_as_utc(self):
        naive = datetime(2026, 2, 18, 12, 0)

        assert compute_period(naive, ReportSettings()) == compute_period(
            WEDNESDAY, ReportSettings()
        )

    def test_custom_close_day_and_zone(self):
        settings = ReportSettings(timezone="UTC", close_weekday=1, close_hour=9)

        period = compute_period(WEDNESDAY, settings)

        # Monday of the same ISO week, already passed
        assert period.slot_end == utc(2026, 2, 16, 9, 0)
        assert period.due is True
        assert period.next_at == utc(2026, 2, 23, 9, 0)

    def test_unknown_timezone_raises(self):
        settings = ReportSettings(timezone="Mars/Olympus_Mons")

        with pytest.raises(ConfigurationError):
            compute_period(WEDNESDAY, settings)


class TestComputePeriodOverride:
    """Tests for an explicit override window."""

    OVERRIDE = ReportPeriodOverride(
        start=datetime.fromisoformat("2026-02-11T18:00:00+03:00"),
        end=datetime.fromisoformat("2026-02-24T16:00:00+03:00"),
    )

    def test_override_used_verbatim(self):
        settings = ReportSettings(period_override=self.OVERRIDE)

        period = compute_period(WEDNESDAY, settings)

        assert period.slot_start == utc(2026, 2, 11, 15, 0)
        assert period.slot_end == utc(2026, 2, 24, 13, 0)
        assert period.next_at == period.slot_end
        assert period.due is False

    def test_override_due_after_end(self):
        settings = ReportSettings(period_override=self.OVERRIDE)

        period = compute_period(utc(2026, 2, 25), settings)

        assert period.due is True
        assert period.ms_to_next < 0

    def test_override_report_id(self):
        settings = ReportSettings(period_override=self.OVERRIDE)
        period = compute_period(WEDNESDAY, settings)

        report_id = report_id_from_period(period.slot_start, period.slot_end, settings)

        assert report_id == "report_2026-02-11_18-00__2026-02-24_16-00"

    def test_naive_override_rejected(self):
        with pytest.raises(ValidationError):
            ReportPeriodOverride(
                start=datetime(2026, 2, 11, 18), end=datetime(2026, 2, 24, 16)
            )

    def test_inverted_override_rejected(self):
        with pytest.raises(ValidationError):
            ReportPeriodOverride(start=utc(2026, 2, 24), end=utc(2026, 2, 11))


class TestReportId:
    """Tests for report_id_from_period."""

    def test_formats_bounds_in_policy_zone(self):
        report_id = report_id_from_period(
            PREVIOUS_CLOSE, FRIDAY_CLOSE, ReportSettings()
        )

        assert report_id == "report_2026-02-13_18-00__2026-02-20_18-00"

    def test_same_window_same_id(self):
        settings = ReportSettings()
        first = compute_period(WEDNESDAY, settings)
        second = compute_period(WEDNESDAY + timedelta(hours=5), settings)

        assert report_id_from_period(
            first.slot_start, first.slot_end, settings
        ) == report_id_from_period(second.slot_start, second.slot_end, settings)


class TestReportScheduler:
    """Tests for ReportScheduler."""

    PAIR = Pair(id=PairId("alice_bob"), members=[PrincipalId("alice"), PrincipalId("bob")])

    def _scheduler(self) -> ReportScheduler:
        # The repository is only needed for the live and current views
        return ReportScheduler(report_settings=ReportSettings(), pair_repository=None)

    def test_schedule_outside_pair(self):
        """Outside a pair only the next boundary is known and nothing is due."""
        schedule = self._scheduler().schedule_for(PrincipalId("alice"), None, SATURDAY)

        assert schedule.in_pair is False
        assert schedule.due is False
        assert schedule.report_id is None
        assert schedule.next_at == NEXT_CLOSE
        assert not schedule.is_resolved

    def test_schedule_in_pair(self):
        schedule = self._scheduler().schedule_for(
            PrincipalId("alice"), self.PAIR, SATURDAY
        )

        assert schedule.in_pair is True
        assert schedule.pair_id == self.PAIR.id
        assert schedule.uid == "alice"
        assert schedule.due is True
        assert schedule.report_id == "report_2026-02-13_18-00__2026-02-20_18-00"
        assert schedule.is_resolved

    @pytest.mark.asyncio
    async def test_current_reads_active_pair(self, unit_env):
        scheduler = await unit_env.get(ReportScheduler)
        alice = make_principal("alice")
        pair = await pair_up(unit_env, alice, make_principal("bob"))

        schedule = await scheduler.current(alice.id, now=SATURDAY)

        assert schedule.pair_id == pair.id
        assert schedule.due is True

    @pytest.mark.asyncio
    async def test_current_outside_pair(self, unit_env):
        scheduler = await unit_env.get(ReportScheduler)

        schedule = await scheduler.current(PrincipalId("nobody"), now=SATURDAY)

        assert schedule.in_pair is False
