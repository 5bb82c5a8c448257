"""Session token domain service."""

import logfire

from pairnotes.config import AuthSettings
from pairnotes.domain.model import Principal
from pairnotes.domain.value import PrincipalId
from pairnotes.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and verifies the session token carrying the current principal."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, principal: Principal) -> str:
        """Create a session token for a principal."""
        with logfire.span("jwt_service.create_token", principal_id=principal.id):
            return create_token(
                principal.id,
                principal.email,
                principal.display_name,
                self.auth_settings,
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token rejected", error=str(e))
                raise

    def principal_from_token(self, token: str | None) -> Principal | None:
        """Resolve the current principal, or None for a missing/invalid token."""
        if not token:
            return None
        try:
            payload = self.verify_token(token)
        except JWTError:
            return None
        return Principal(
            id=PrincipalId(payload.user_id),
            email=payload.email,
            display_name=payload.name,
        )
