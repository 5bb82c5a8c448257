"""Sign-out use case."""

from pydantic import BaseModel

from pairnotes.application.session import SessionRegistry
from pairnotes.domain.model import Principal
from pairnotes.domain.service import AuthService
from pairnotes.domain.value import PrincipalId


class SignOutRequest(BaseModel):
    """Sign-out request."""

    user_id: str  # From authenticated user
    email: str | None = None
    name: str | None = None


class SignOutResponse(BaseModel):
    """Sign-out response."""

    success: bool
    message: str


class SignOutUseCase:
    """Use case for ending a principal's session."""

    def __init__(
        self, auth_service: AuthService, session_registry: SessionRegistry
    ) -> None:
        self.auth_service = auth_service
        self.session_registry = session_registry

    async def execute(self, request: SignOutRequest) -> SignOutResponse:
        """Stop the pair session and sign out of the identity provider."""
        principal = Principal(
            id=PrincipalId(request.user_id),
            email=request.email,
            display_name=request.name,
        )
        await self.session_registry.stop(principal.id)
        await self.auth_service.sign_out(principal)
        return SignOutResponse(success=True, message="Successfully signed out")
