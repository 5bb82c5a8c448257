"""Sign-up use case."""

from pydantic import BaseModel, Field

from pairnotes.application.session import SessionRegistry
from pairnotes.domain.service import AuthService, JWTService, ProfileService

from .sign_in import AuthResponse


class SignUpRequest(BaseModel):
    """Sign-up request."""

    email: str
    password: str
    name: str | None = Field(default=None, max_length=100)


class SignUpUseCase:
    """Use case for registering a new email and password account."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        profile_service: ProfileService,
        session_registry: SessionRegistry,
    ) -> None:
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.profile_service = profile_service
        self.session_registry = session_registry

    async def execute(self, request: SignUpRequest) -> AuthResponse:
        """Register, create the profile, start the session, issue a token.

        Raises:
            InvalidInputError: If email or password is missing or too short
            AuthenticationError: If the provider rejects the registration
        """
        name = request.name.strip() if request.name else None
        principal = await self.auth_service.sign_up(
            request.email, request.password, name or None
        )
        await self.profile_service.ensure_profile(principal)
        await self.session_registry.start(principal)

        return AuthResponse(
            token=self.jwt_service.create_token(principal),
            user_id=principal.id,
            email=principal.email,
            display_name=principal.display_name,
        )
