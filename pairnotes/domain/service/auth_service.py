"""Authentication domain service."""

from abc import ABC, abstractmethod

import logfire

from pairnotes.domain.error import InvalidInputError
from pairnotes.domain.model import Principal

from .base import Service

MIN_PASSWORD_CHARS = 6


class IdentityClient(ABC):
    """External identity provider (email and password accounts)."""

    @abstractmethod
    async def sign_up(self, email: str, password: str, name: str | None) -> Principal:
        """Register a new account and return its principal.

        Raises:
            AuthenticationError: email_in_use, weak_password, network_failure, ...
        """
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Principal:
        """Verify credentials and return the principal.

        Raises:
            AuthenticationError: invalid_credentials, user_not_found,
                user_disabled, too_many_requests, network_failure, ...
        """
        pass

    @abstractmethod
    async def sign_out(self, principal: Principal) -> None:
        """End the principal's provider session, if the provider keeps one."""
        pass


class AuthService(Service):
    """Domain service for sign-up, sign-in and sign-out."""

    def __init__(self, identity_client: IdentityClient) -> None:
        """Initialize auth service.

        Args:
            identity_client: Identity provider client
        """
        self.identity_client = identity_client

    @staticmethod
    def _validate(email: str, password: str) -> str:
        email = email.strip().lower()
        if not email:
            raise InvalidInputError("Email is required")
        if not password:
            raise InvalidInputError("Password is required")
        return email

    async def sign_up(
        self, email: str, password: str, name: str | None = None
    ) -> Principal:
        """Register a new account.

        Raises:
            InvalidInputError: If email or password is missing or too short
            AuthenticationError: If the provider rejects the registration
        """
        with logfire.span("auth_service.sign_up"):
            email = self._validate(email, password)
            if len(password) < MIN_PASSWORD_CHARS:
                raise InvalidInputError(
                    f"Password must be at least {MIN_PASSWORD_CHARS} characters"
                )
            principal = await self.identity_client.sign_up(email, password, name)
            logfire.info("Principal signed up", principal_id=principal.id)
            return principal

    async def sign_in(self, email: str, password: str) -> Principal:
        """Sign in with email and password.

        Raises:
            InvalidInputError: If email or password is missing
            AuthenticationError: If the provider rejects the credentials
        """
        with logfire.span("auth_service.sign_in"):
            email = self._validate(email, password)
            principal = await self.identity_client.sign_in(email, password)
            logfire.info("Principal signed in", principal_id=principal.id)
            return principal

    async def sign_out(self, principal: Principal) -> None:
        """Sign the principal out of the identity provider."""
        with logfire.span("auth_service.sign_out", principal_id=principal.id):
            await self.identity_client.sign_out(principal)
