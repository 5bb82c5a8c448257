"""Reporting windows and per-principal schedules.

The default policy closes a window every week at a fixed weekday and hour in
a fixed timezone (Friday 18:00, Europe/Moscow unless configured). A window
runs from one close to the next. An explicit override window replaces the
weekly rule entirely.
"""

from collections.abc import AsyncIterator
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pairnotes.config import ReportSettings
from pairnotes.domain.model import Pair, ReportPeriod, Schedule
from pairnotes.domain.model.common import utcnow
from pairnotes.domain.repository import PairRepository
from pairnotes.domain.value import PrincipalId, ReportId
from pairnotes.util.error import ConfigurationError
from pairnotes.util.streams import combine_latest, ticker

from .base import Service

REPORT_ID_FORMAT = "%Y-%m-%d_%H-%M"


def policy_zone(settings: ReportSettings) -> ZoneInfo:
    """Resolve the policy's IANA timezone."""
    try:
        return ZoneInfo(settings.timezone)
    except ZoneInfoNotFoundError as e:
        raise ConfigurationError(f"Unknown report timezone: {settings.timezone}") from e


def _close_at(day: date, settings: ReportSettings, zone: ZoneInfo) -> datetime:
    # Wall-clock close time in the policy zone, as a UTC instant
    local = datetime.combine(day, time(hour=settings.close_hour), tzinfo=zone)
    return local.astimezone(timezone.utc)


def _ms_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() * 1000)


def compute_period(now: datetime, settings: ReportSettings) -> ReportPeriod:
    """Compute the reporting window relative to ``now``.

    Weekly rule: find this week's close (ISO weekdays, so Sunday is day 7 and
    a weekend ``now`` resolves to the close just passed), shift it by
    ``shift_weeks``, and take the 7 days ending there. ``next_at`` is that
    close, or the one a week later if ``now`` is already past it.

    Override: the configured bounds are used verbatim with
    ``next_at = slot_end``.

    Args:
        now: Reference instant (naive values are taken as UTC)
        settings: Report policy

    Returns:
        The window, the next boundary and whether the window is due
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    override = settings.period_override
    if override is not None:
        slot_start = override.start.astimezone(timezone.utc)
        slot_end = override.end.astimezone(timezone.utc)
        return ReportPeriod(
            slot_start=slot_start,
            slot_end=slot_end,
            next_at=slot_end,
            ms_to_next=_ms_between(now, slot_end),
            due=now >= slot_end,
        )

    zone = policy_zone(settings)
    today = now.astimezone(zone).date()
    close_day = (
        today
        + timedelta(days=settings.close_weekday - today.isoweekday())
        + timedelta(weeks=settings.shift_weeks)
    )
    slot_end = _close_at(close_day, settings, zone)
    slot_start = _close_at(close_day - timedelta(days=7), settings, zone)
    if now < slot_end:
        next_at = slot_end
    else:
        next_at = _close_at(close_day + timedelta(days=7), settings, zone)
    return ReportPeriod(
        slot_start=slot_start,
        slot_end=slot_end,
        next_at=next_at,
        ms_to_next=_ms_between(now, next_at),
        due=now >= slot_end,
    )


def report_id_from_period(
    start: datetime, end: datetime, settings: ReportSettings
) -> ReportId:
    """Derive the report ID for a window.

    Both bounds are formatted to the minute in the policy timezone, so the
    same window always maps to the same report and distinct windows
    (override windows included) never collide.

    Example:
        ``report_2026-02-11_18-00__2026-02-24_16-00``
    """
    zone = policy_zone(settings)
    return ReportId(
        f"report_{start.astimezone(zone).strftime(REPORT_ID_FORMAT)}"
        f"__{end.astimezone(zone).strftime(REPORT_ID_FORMAT)}"
    )


class ReportScheduler(Service):
    """Resolves the reporting schedule for a principal."""

    def __init__(
        self, report_settings: ReportSettings, pair_repository: PairRepository
    ) -> None:
        """Initialize report scheduler.

        Args:
            report_settings: Window policy (timezone, close day/hour, override)
            pair_repository: Pair read side, for the caller's active pair
        """
        self.report_settings = report_settings
        self.pair_repository = pair_repository

    def compute_period(self, now: datetime) -> ReportPeriod:
        return compute_period(now, self.report_settings)

    def schedule_for(
        self, me: PrincipalId, active_pair: Pair | None, now: datetime
    ) -> Schedule:
        """Build the schedule ``me`` sees at ``now``.

        Outside a pair only ``next_at``/``ms_to_next`` are set and the
        schedule is never due.
        """
        period = self.compute_period(now)
        if active_pair is None:
            return Schedule(
                in_pair=False,
                next_at=period.next_at,
                ms_to_next=period.ms_to_next,
                due=False,
            )
        return Schedule(
            in_pair=True,
            pair_id=active_pair.id,
            uid=me,
            slot_start=period.slot_start,
            slot_end=period.slot_end,
            report_id=report_id_from_period(
                period.slot_start, period.slot_end, self.report_settings
            ),
            next_at=period.next_at,
            ms_to_next=period.ms_to_next,
            due=period.due,
        )

    async def current(self, me: PrincipalId, now: datetime | None = None) -> Schedule:
        """Schedule for ``me`` right now, from a fresh active-pair read."""
        active_pair = await self.pair_repository.find_active_for_member(me)
        return self.schedule_for(me, active_pair, now or utcnow())

    async def watch(self, me: PrincipalId) -> AsyncIterator[Schedule]:
        """Re-evaluate on every tick and whenever the active pair changes."""
        feeds = combine_latest(
            ticker(self.report_settings.tick_seconds),
            self.pair_repository.watch_active_for_member(me),
        )
        async for _, active_pair in feeds:
            yield self.schedule_for(me, active_pair, utcnow())
