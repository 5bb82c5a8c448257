"""Interface layer errors and the domain error to HTTP mapping."""

from fastapi import status
from fastapi.responses import JSONResponse

from pairnotes.domain.error import (
    AuthenticationError,
    AuthErrorKind,
    DomainError,
    ErrorKind,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class NotAuthenticatedError(InterfaceError):
    """Request has no valid session cookie."""

    def __init__(self, message: str = "Not authenticated") -> None:
        self.message = message
        super().__init__(message)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.ALREADY_PROCESSED: status.HTTP_409_CONFLICT,
    ErrorKind.ALREADY_PAIRED: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_INVITE: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_IN_PAIR: status.HTTP_412_PRECONDITION_FAILED,
    ErrorKind.NOT_DUE_YET: status.HTTP_412_PRECONDITION_FAILED,
    ErrorKind.EXTERNAL_SERVICE_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.TRANSACTION_CONFLICT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
}

# Identity provider failures that are not the caller's credentials
STATUS_BY_AUTH_KIND: dict[AuthErrorKind, int] = {
    AuthErrorKind.TOO_MANY_REQUESTS: status.HTTP_429_TOO_MANY_REQUESTS,
    AuthErrorKind.NETWORK_FAILURE: status.HTTP_502_BAD_GATEWAY,
    AuthErrorKind.EMAIL_IN_USE: status.HTTP_409_CONFLICT,
    AuthErrorKind.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
}

AUTH_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.INVALID_CREDENTIALS: "Wrong email or password",
    AuthErrorKind.USER_NOT_FOUND: "No account for this email",
    AuthErrorKind.USER_DISABLED: "This account is disabled",
    AuthErrorKind.TOO_MANY_REQUESTS: "Too many attempts, try again later",
    AuthErrorKind.NETWORK_FAILURE: "Could not reach the sign-in service",
    AuthErrorKind.EMAIL_IN_USE: "An account with this email already exists",
    AuthErrorKind.WEAK_PASSWORD: "Password is too weak",
    AuthErrorKind.UNKNOWN: "Sign-in failed",
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    if isinstance(error, AuthenticationError):
        return STATUS_BY_AUTH_KIND.get(
            error.auth_kind, status.HTTP_401_UNAUTHORIZED
        )
    return STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST)


def domain_error_response(error: DomainError) -> JSONResponse:
    """JSON error body: ``{"error", "message", "retryable"[, "auth_kind"]}``."""
    body: dict[str, object] = {
        "error": error.kind.value,
        "message": error.message,
        "retryable": error.retryable,
    }
    if isinstance(error, AuthenticationError):
        body["auth_kind"] = error.auth_kind.value
        body["message"] = AUTH_MESSAGES[error.auth_kind]
    return JSONResponse(status_code=status_for(error), content=body)
