"""Report routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from pairnotes.application.usecase.report import (
    GenerateReportUseCase,
    GetCurrentReportUseCase,
    GetScheduleUseCase,
)
from pairnotes.application.usecase.report.generate_report import (
    GenerateReportRequest,
    GenerateReportResponse,
)
from pairnotes.application.usecase.report.get_current_report import (
    GetCurrentReportRequest,
    GetCurrentReportResponse,
)
from pairnotes.application.usecase.report.get_schedule import (
    GetScheduleRequest,
    ScheduleResponse,
)
from pairnotes.domain.service import JWTService
from pairnotes.interface.api.dependencies import authenticate

router = APIRouter(prefix="/reports", tags=["reports"], route_class=DishkaRoute)


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    get_schedule_use_case: FromDishka[GetScheduleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ScheduleResponse:
    """The caller's current reporting window."""
    principal = authenticate(jwt_service, auth_token)
    return await get_schedule_use_case.execute(GetScheduleRequest(user_id=principal.id))


@router.get("/current", response_model=GetCurrentReportResponse)
async def get_current_report(
    get_current_report_use_case: FromDishka[GetCurrentReportUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentReportResponse:
    """The current window's report, if one was generated."""
    principal = authenticate(jwt_service, auth_token)
    return await get_current_report_use_case.execute(
        GetCurrentReportRequest(user_id=principal.id)
    )


@router.post("/generate", response_model=GenerateReportResponse)
async def generate_report(
    generate_report_use_case: FromDishka[GenerateReportUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GenerateReportResponse:
    """Generate the report of the caller's closed window.

    Safe to call from both partners at once: only one summarizer call is
    made per window, the other caller gets ``generated=false``.

    Errors:
        412 not_in_pair / not_due_yet, 502 external_service_failure
    """
    principal = authenticate(jwt_service, auth_token)
    return await generate_report_use_case.execute(
        GenerateReportRequest(user_id=principal.id)
    )
