"""Update profile use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from pairnotes.domain.service import ProfileService
from pairnotes.domain.value import PrincipalId


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    user_id: str  # From authenticated user
    name: str | None = Field(default=None, max_length=100)
    email: str | None = None


class UpdateProfileResponse(BaseModel):
    """Update profile response."""

    user_id: str
    email: str | None
    name: str | None
    pair_id: str | None
    partner_id: str | None
    partner_email: str | None
    updated_at: datetime


class UpdateProfileUseCase:
    """Use case for updating the caller's own name and email.

    Pairing fields are derived state and cannot be changed here.
    """

    def __init__(self, profile_service: ProfileService) -> None:
        """Initialize update profile use case.

        Args:
            profile_service: Profile domain service
        """
        self.profile_service = profile_service

    async def execute(self, request: UpdateProfileRequest) -> UpdateProfileResponse:
        """Execute update profile flow.

        Raises:
            NotFoundError: If the profile does not exist
            InvalidInputError: If the email is not valid
        """
        profile = await self.profile_service.update_own_profile(
            PrincipalId(request.user_id), name=request.name, email=request.email
        )
        return UpdateProfileResponse(
            user_id=profile.id,
            email=profile.email,
            name=profile.name,
            pair_id=profile.pair_id,
            partner_id=profile.partner_id,
            partner_email=profile.partner_email,
            updated_at=profile.updated_at,
        )
