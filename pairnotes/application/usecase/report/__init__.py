"""Report use cases."""

from .generate_report import GenerateReportUseCase
from .get_current_report import GetCurrentReportUseCase
from .get_schedule import GetScheduleUseCase

__all__ = ["GenerateReportUseCase", "GetCurrentReportUseCase", "GetScheduleUseCase"]
