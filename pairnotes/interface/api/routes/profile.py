"""Profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, Field

from pairnotes.application.usecase.profile import UpdateProfileUseCase
from pairnotes.application.usecase.profile.update_profile import (
    UpdateProfileRequest,
    UpdateProfileResponse,
)
from pairnotes.domain.service import JWTService
from pairnotes.interface.api.dependencies import authenticate

router = APIRouter(prefix="/profile", tags=["profile"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    name: str | None = Field(None, max_length=100)
    email: str | None = None


@router.patch("", response_model=UpdateProfileResponse)
async def update_my_profile(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateProfileResponse:
    """Update the caller's name and/or email.

    The email is mirrored into the public directory, which is what partners
    use to find the caller when sending an invite.

    Example:
        PATCH /profile
        {"name": "Alice", "email": "Alice@Example.com"}

        Response email is normalised: "alice@example.com"
    """
    principal = authenticate(jwt_service, auth_token)
    return await update_profile_use_case.execute(
        UpdateProfileRequest(
            user_id=principal.id, name=request.name, email=request.email
        )
    )
