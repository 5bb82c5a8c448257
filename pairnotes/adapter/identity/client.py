"""Identity Toolkit REST client.

Email and password accounts live with the identity provider. This client
only registers, verifies and renames them; sessions on our side are JWTs
issued by ``JWTService``.
"""

from typing import Any

import httpx
import logfire

from pairnotes.adapter.error import ProviderError, ProviderHTTPError
from pairnotes.domain.error import AuthenticationError, AuthErrorKind
from pairnotes.domain.model import Principal
from pairnotes.domain.service.auth_service import IdentityClient
from pairnotes.domain.value import PrincipalId

_PROVIDER_CODES: dict[str, AuthErrorKind] = {
    "EMAIL_NOT_FOUND": AuthErrorKind.USER_NOT_FOUND,
    "INVALID_PASSWORD": AuthErrorKind.INVALID_CREDENTIALS,
    "INVALID_LOGIN_CREDENTIALS": AuthErrorKind.INVALID_CREDENTIALS,
    "INVALID_EMAIL": AuthErrorKind.INVALID_CREDENTIALS,
    "USER_DISABLED": AuthErrorKind.USER_DISABLED,
    "TOO_MANY_ATTEMPTS_TRY_LATER": AuthErrorKind.TOO_MANY_REQUESTS,
    "EMAIL_EXISTS": AuthErrorKind.EMAIL_IN_USE,
    "WEAK_PASSWORD": AuthErrorKind.WEAK_PASSWORD,
}


def map_provider_error(message: str | None) -> AuthErrorKind:
    """Map a provider ``error.message`` to an error kind.

    The provider sometimes appends detail after the code, e.g.
    ``"WEAK_PASSWORD : Password should be at least 6 characters"``.
    """
    if not message:
        return AuthErrorKind.UNKNOWN
    parts = message.replace(":", " ").split()
    code = parts[0] if parts else ""
    return _PROVIDER_CODES.get(code, AuthErrorKind.UNKNOWN)


def _error_code(body: Any) -> str | None:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str):
                return message
    return None


class FirebaseIdentityClient(IdentityClient):
    """Identity Toolkit client (``accounts:*`` endpoints)."""

    def __init__(
        self, base_url: str, api_key: str, timeout_seconds: float = 15.0
    ) -> None:
        """Initialize identity client.

        Args:
            base_url: Identity Toolkit base URL, e.g.
                ``https://identitytoolkit.googleapis.com/v1``
            api_key: Web API key
            timeout_seconds: Request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    async def sign_up(self, email: str, password: str, name: str | None) -> Principal:
        with logfire.span("identity.sign_up"):
            data = await self._call(
                "accounts:signUp",
                {"email": email, "password": password, "returnSecureToken": True},
            )
            if name:
                # Display name is set on a second call, signUp ignores it
                await self._call(
                    "accounts:update",
                    {
                        "idToken": data.get("idToken"),
                        "displayName": name,
                        "returnSecureToken": False,
                    },
                )
            return Principal(
                id=PrincipalId(data["localId"]),
                email=data.get("email", email),
                display_name=name or None,
            )

    async def sign_in(self, email: str, password: str) -> Principal:
        with logfire.span("identity.sign_in"):
            data = await self._call(
                "accounts:signInWithPassword",
                {"email": email, "password": password, "returnSecureToken": True},
            )
            return Principal(
                id=PrincipalId(data["localId"]),
                email=data.get("email", email),
                display_name=data.get("displayName") or None,
            )

    async def sign_out(self, principal: Principal) -> None:
        # The provider keeps no server-side session for password sign-in
        logfire.info("Principal signed out", principal_id=principal.id)

    async def _call(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to an ``accounts:*`` endpoint.

        Raises:
            AuthenticationError: With the mapped kind on any failure
        """
        try:
            return await self._post(endpoint, payload)
        except ProviderHTTPError as e:
            kind = map_provider_error(e.provider_code)
            logfire.warn(
                "Identity provider rejected request",
                endpoint=endpoint,
                status_code=e.status_code,
                auth_kind=kind.value,
            )
            raise AuthenticationError(kind) from e
        except ProviderError as e:
            logfire.error(
                "Identity provider unreachable", endpoint=endpoint, error=str(e)
            )
            raise AuthenticationError(AuthErrorKind.NETWORK_FAILURE, str(e)) from e

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(
                    url, params={"key": self.api_key}, json=payload
                )
        except httpx.HTTPError as e:
            raise ProviderError(f"NETWORK: {str(e) or type(e).__name__}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            raise ProviderHTTPError(
                response.status_code,
                response.reason_phrase,
                response.text,
                provider_code=_error_code(body),
            )
        if not isinstance(body, dict):
            raise ProviderError("Identity provider returned a non-JSON response")
        return body


class MockIdentityClient(IdentityClient):
    """Mock identity provider for testing.

    Keeps accounts in memory. Principal IDs are ``uid-<n>`` in sign-up order.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, Principal]] = {}
        self.disabled: set[str] = set()
        self.signed_out: list[PrincipalId] = []

    async def sign_up(self, email: str, password: str, name: str | None) -> Principal:
        if email in self.accounts:
            raise AuthenticationError(AuthErrorKind.EMAIL_IN_USE)
        principal = Principal(
            id=PrincipalId(f"uid-{len(self.accounts) + 1}"),
            email=email,
            display_name=name or None,
        )
        self.accounts[email] = (password, principal)
        return principal

    async def sign_in(self, email: str, password: str) -> Principal:
        account = self.accounts.get(email)
        if account is None:
            raise AuthenticationError(AuthErrorKind.USER_NOT_FOUND)
        if email in self.disabled:
            raise AuthenticationError(AuthErrorKind.USER_DISABLED)
        stored_password, principal = account
        if stored_password != password:
            raise AuthenticationError(AuthErrorKind.INVALID_CREDENTIALS)
        return principal

    async def sign_out(self, principal: Principal) -> None:
        self.signed_out.append(principal.id)
