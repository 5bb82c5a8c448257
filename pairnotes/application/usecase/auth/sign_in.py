"""Sign-in use case."""

import logfire
from pydantic import BaseModel

from pairnotes.application.session import SessionRegistry
from pairnotes.domain.service import AuthService, JWTService, ProfileService


class SignInRequest(BaseModel):
    """Sign-in request."""

    email: str
    password: str


class AuthResponse(BaseModel):
    """Session token and the principal it was issued for."""

    token: str
    user_id: str
    email: str | None
    display_name: str | None


class SignInUseCase:
    """Use case for email and password sign-in."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        profile_service: ProfileService,
        session_registry: SessionRegistry,
    ) -> None:
        """Initialize sign-in use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
            profile_service: Profile domain service
            session_registry: Background pair sessions
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.profile_service = profile_service
        self.session_registry = session_registry

    async def execute(self, request: SignInRequest) -> AuthResponse:
        """Execute sign-in flow.

        Steps:
        1. Verify credentials with the identity provider
        2. Make sure the profile and directory entry exist
        3. Start the principal's pair session
        4. Issue a session token

        Raises:
            InvalidInputError: If email or password is missing
            AuthenticationError: If the provider rejects the credentials
        """
        principal = await self.auth_service.sign_in(request.email, request.password)
        profile = await self.profile_service.ensure_profile(principal)
        await self.session_registry.start(principal)

        logfire.info("Sign-in complete", principal_id=principal.id)

        return AuthResponse(
            token=self.jwt_service.create_token(principal),
            user_id=principal.id,
            email=principal.email,
            display_name=profile.name or principal.display_name,
        )
