"""Get current report use case."""

from datetime import datetime

from pydantic import BaseModel

from pairnotes.domain.model import Report
from pairnotes.domain.service import ReportScheduler, ReportService
from pairnotes.domain.value import PrincipalId, ReportStatus

from .get_schedule import ScheduleResponse


class SourceNoteItem(BaseModel):
    """Note a report was generated from (text truncated)."""

    note_id: str
    text: str
    owner_uid: str
    updated_at: datetime | None = None


class ReportItem(BaseModel):
    """Report item in response."""

    report_id: str
    pair_id: str
    status: ReportStatus
    created_by: str
    period_start: datetime
    period_end: datetime
    notes_count: int | None = None
    summary: str | None = None
    error: str | None = None
    source_notes: list[SourceNoteItem]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_report(cls, report: Report) -> "ReportItem":
        return cls(
            report_id=report.id,
            pair_id=report.pair_id,
            status=report.status,
            created_by=report.created_by,
            period_start=report.period_start,
            period_end=report.period_end,
            notes_count=report.notes_count,
            summary=report.summary,
            error=report.error,
            source_notes=[
                SourceNoteItem(
                    note_id=n.id,
                    text=n.text,
                    owner_uid=n.owner_uid,
                    updated_at=n.updated_at,
                )
                for n in report.source_notes
            ],
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class GetCurrentReportRequest(BaseModel):
    """Get current report request."""

    user_id: str  # From authenticated user


class GetCurrentReportResponse(BaseModel):
    """The caller's schedule and the report for its current window, if any."""

    schedule: ScheduleResponse
    report: ReportItem | None = None


class GetCurrentReportUseCase:
    """Use case for reading the current window's report."""

    def __init__(
        self, report_scheduler: ReportScheduler, report_service: ReportService
    ) -> None:
        self.report_scheduler = report_scheduler
        self.report_service = report_service

    async def execute(
        self, request: GetCurrentReportRequest
    ) -> GetCurrentReportResponse:
        schedule = await self.report_scheduler.current(PrincipalId(request.user_id))
        report = await self.report_service.get_report(schedule)
        return GetCurrentReportResponse(
            schedule=ScheduleResponse.from_schedule(schedule),
            report=ReportItem.from_report(report) if report else None,
        )
