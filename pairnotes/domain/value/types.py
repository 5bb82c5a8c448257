"""Domain value objects for pairnotes.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from pairnotes.domain.value.common import RootValueObject


class InviteStatus(str, Enum):
    """Status of a pair invite. ``accepted`` and ``declined`` are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PairStatus(str, Enum):
    """Status of a pair."""

    ACTIVE = "active"
    ENDED = "ended"


class ReportStatus(str, Enum):
    """Status of a report document."""

    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class Email(RootValueObject[str]):
    """Normalised email address (trimmed, lowercase).

    Used to match invite targets against the public directory, so two
    spellings of the same address always compare equal.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> str:
        """Trim and lowercase the raw value."""
        if not isinstance(v, str):
            raise ValueError("Email must be a string")
        return v.strip().lower()

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email is not empty and within length limits."""
        if len(v) < 1 or len(v) > 320:
            raise ValueError("Email must be 1-320 characters")
        return v
