"""Generate report use case."""

from pydantic import BaseModel

from pairnotes.domain.service import ReportScheduler, ReportService
from pairnotes.domain.value import PrincipalId

from .get_current_report import ReportItem


class GenerateReportRequest(BaseModel):
    """Generate report request."""

    user_id: str  # From authenticated user


class GenerateReportResponse(BaseModel):
    """Generate report response.

    ``generated`` is False when another caller already claimed or finished
    the window; ``report`` is then whatever that caller has written so far.
    """

    generated: bool
    report: ReportItem | None = None


class GenerateReportUseCase:
    """Use case for generating the report of the caller's closed window."""

    def __init__(
        self, report_scheduler: ReportScheduler, report_service: ReportService
    ) -> None:
        """Initialize generate report use case.

        Args:
            report_scheduler: Resolves the caller's current window
            report_service: Report domain service
        """
        self.report_scheduler = report_scheduler
        self.report_service = report_service

    async def execute(self, request: GenerateReportRequest) -> GenerateReportResponse:
        """Execute generate report flow.

        Raises:
            NotInPairError: If the caller has no active pair
            NotDueYetError: If the window has not closed yet
            ExternalServiceError: If the summarizer failed
        """
        schedule = await self.report_scheduler.current(PrincipalId(request.user_id))
        report = await self.report_service.generate(schedule)
        if report is not None:
            return GenerateReportResponse(
                generated=True, report=ReportItem.from_report(report)
            )

        existing = await self.report_service.get_report(schedule)
        return GenerateReportResponse(
            generated=False,
            report=ReportItem.from_report(existing) if existing else None,
        )
