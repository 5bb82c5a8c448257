"""Domain layer errors.

Every error carries a ``kind`` the caller can branch on and a ``retryable``
flag telling it whether trying again later (without new input) may succeed.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Structured error categories surfaced to callers."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    ALREADY_PROCESSED = "already_processed"
    ALREADY_PAIRED = "already_paired"
    DUPLICATE_INVITE = "duplicate_invite"
    NOT_IN_PAIR = "not_in_pair"
    NOT_DUE_YET = "not_due_yet"
    EXTERNAL_SERVICE_FAILURE = "external_service_failure"
    TRANSACTION_CONFLICT = "transaction_conflict"
    AUTHENTICATION = "authentication"


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT
    retryable: bool = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(DomainError):
    """Bad or missing user-supplied data."""

    kind = ErrorKind.INVALID_INPUT


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a principal acts on something that does not target it."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, resource: str, resource_id: str, principal_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.principal_id = principal_id
        super().__init__(
            f"Principal {principal_id} is not allowed to act on {resource} {resource_id}"
        )


class AlreadyProcessedError(DomainError):
    """Raised when an invite has already reached a terminal status."""

    kind = ErrorKind.ALREADY_PROCESSED

    def __init__(self, invite_id: str, status: str):
        self.invite_id = invite_id
        self.status = status
        super().__init__(f"Invite {invite_id} already processed ({status})")


class AlreadyPairedError(DomainError):
    """Raised when the caller already belongs to a pair."""

    kind = ErrorKind.ALREADY_PAIRED

    def __init__(self, principal_id: str, pair_id: str):
        self.principal_id = principal_id
        self.pair_id = pair_id
        super().__init__(f"Principal {principal_id} is already in pair {pair_id}")


class DuplicateInviteError(DomainError):
    """Raised when a pending invite already exists between two principals."""

    kind = ErrorKind.DUPLICATE_INVITE

    def __init__(self, from_uid: str, to_uid: str, incoming: bool):
        self.from_uid = from_uid
        self.to_uid = to_uid
        self.incoming = incoming
        direction = "incoming" if incoming else "outgoing"
        super().__init__(
            f"A pending {direction} invite already exists between {from_uid} and {to_uid}"
        )


class NotInPairError(DomainError):
    """Raised when an operation requires an active pair and there is none."""

    kind = ErrorKind.NOT_IN_PAIR
    retryable = True


class NotDueYetError(DomainError):
    """Raised when report generation is requested before the window closes."""

    kind = ErrorKind.NOT_DUE_YET
    retryable = True


class ExternalServiceError(DomainError):
    """Summarizer or identity provider failure (timeout, network, HTTP)."""

    kind = ErrorKind.EXTERNAL_SERVICE_FAILURE
    retryable = True


class TransactionConflictError(DomainError):
    """Raised when a transaction keeps conflicting after all retries."""

    kind = ErrorKind.TRANSACTION_CONFLICT
    retryable = True

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Transaction aborted after {attempts} conflicting attempts")


class AuthenticationError(DomainError):
    """Identity provider rejected a sign-in or sign-up."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, auth_kind: "AuthErrorKind", message: str | None = None):
        self.auth_kind = auth_kind
        self.retryable = auth_kind in (
            AuthErrorKind.TOO_MANY_REQUESTS,
            AuthErrorKind.NETWORK_FAILURE,
        )
        super().__init__(message or auth_kind.value)


class AuthErrorKind(str, Enum):
    """User-facing identity provider failure categories."""

    INVALID_CREDENTIALS = "invalid_credentials"
    USER_NOT_FOUND = "user_not_found"
    USER_DISABLED = "user_disabled"
    TOO_MANY_REQUESTS = "too_many_requests"
    NETWORK_FAILURE = "network_failure"
    EMAIL_IN_USE = "email_in_use"
    WEAK_PASSWORD = "weak_password"
    UNKNOWN = "unknown"
