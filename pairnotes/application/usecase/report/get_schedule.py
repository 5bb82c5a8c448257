"""Get report schedule use case."""

from datetime import datetime

from pydantic import BaseModel

from pairnotes.domain.model import Schedule
from pairnotes.domain.service import ReportScheduler
from pairnotes.domain.value import PrincipalId


class ScheduleResponse(BaseModel):
    """The caller's reporting schedule.

    Outside a pair only ``next_at`` and ``ms_to_next`` are set.
    """

    in_pair: bool
    pair_id: str | None = None
    report_id: str | None = None
    slot_start: datetime | None = None
    slot_end: datetime | None = None
    next_at: datetime | None = None
    ms_to_next: int | None = None
    due: bool = False

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleResponse":
        return cls(
            in_pair=schedule.in_pair,
            pair_id=schedule.pair_id,
            report_id=schedule.report_id,
            slot_start=schedule.slot_start,
            slot_end=schedule.slot_end,
            next_at=schedule.next_at,
            ms_to_next=schedule.ms_to_next,
            due=schedule.due,
        )


class GetScheduleRequest(BaseModel):
    """Get schedule request."""

    user_id: str  # From authenticated user


class GetScheduleUseCase:
    """Use case for reading the caller's current reporting window."""

    def __init__(self, report_scheduler: ReportScheduler) -> None:
        self.report_scheduler = report_scheduler

    async def execute(self, request: GetScheduleRequest) -> ScheduleResponse:
        schedule = await self.report_scheduler.current(PrincipalId(request.user_id))
        return ScheduleResponse.from_schedule(schedule)
