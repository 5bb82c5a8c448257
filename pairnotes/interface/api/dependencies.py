"""Request helpers shared by routes."""

from fastapi import Response

from pairnotes.config import Settings
from pairnotes.domain.model import Principal
from pairnotes.domain.service import JWTService
from pairnotes.interface.error import NotAuthenticatedError
from pairnotes.util.jwt import JWTError

AUTH_COOKIE = "auth_token"


def authenticate(jwt_service: JWTService, auth_token: str | None) -> Principal:
    """Resolve the principal carried by the session cookie.

    Raises:
        NotAuthenticatedError: If the cookie is missing, invalid or expired
    """
    if not auth_token:
        raise NotAuthenticatedError()
    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise NotAuthenticatedError(str(e)) from e
    return Principal(id=payload.user_id, email=payload.email, display_name=payload.name)


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the HTTP-only session cookie.

    Production serves the frontend from another site, which needs
    ``samesite="none"`` and therefore ``secure``.
    """
    is_production = settings.environment == "production"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE, path="/")
