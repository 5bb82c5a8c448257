"""Session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from pairnotes.config import AuthSettings


class TokenPayload(BaseModel):
    """Session token payload."""

    user_id: str
    email: str | None = None
    name: str | None = None
    exp: datetime


class JWTError(Exception):
    """Session token is missing, malformed or expired."""

    pass


def create_token(
    user_id: str, email: str | None, name: str | None, settings: AuthSettings
) -> str:
    """Create a signed session token for a principal.

    Args:
        user_id: Identity provider UID
        email: Principal email, if known
        name: Display name, if known
        settings: Authentication settings

    Returns:
        Encoded JWT
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)
    payload = {"user_id": user_id, "email": email, "name": name, "exp": expiry}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload(**payload)
