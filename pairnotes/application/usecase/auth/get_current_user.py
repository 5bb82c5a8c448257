"""Get current user use case."""

from pydantic import BaseModel

from pairnotes.domain.service import JWTService, ProfileService
from pairnotes.domain.value import PrincipalId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    email: str | None
    name: str | None
    pair_id: str | None
    partner_id: str | None
    partner_email: str | None


class GetCurrentUserUseCase:
    """Use case for getting the current authenticated principal's profile."""

    def __init__(self, jwt_service: JWTService, profile_service: ProfileService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            profile_service: Profile domain service
        """
        self.jwt_service = jwt_service
        self.profile_service = profile_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the principal has no profile
        """
        payload = self.jwt_service.verify_token(request.token)
        profile = await self.profile_service.get_profile(PrincipalId(payload.user_id))

        return GetCurrentUserResponse(
            user_id=profile.id,
            email=profile.email,
            name=profile.name,
            pair_id=profile.pair_id,
            partner_id=profile.partner_id,
            partner_email=profile.partner_email,
        )
