"""Domain value objects for Trove.

Value objects are immutable and defined by their values, not identity.
Roles, categories and statuses are closed enumerations; every decision
point matches on them exhaustively.
"""

from enum import Enum

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator

from trove.domain.value.common import RootValueObject, ValueObject


class CommunityRole(str, Enum):
    """Role of a member inside one community."""

    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"


class CommunityCategory(str, Enum):
    """Closed set of community categories."""

    ADVENTURE = "adventure"
    CULTURAL = "cultural"
    FOOD_AND_DINING = "food_and_dining"
    PHOTOGRAPHY = "photography"
    BUDGET_TRAVEL = "budget_travel"
    LUXURY_TRAVEL = "luxury_travel"
    SOLO_TRAVEL = "solo_travel"
    FAMILY_TRAVEL = "family_travel"
    BUSINESS_TRAVEL = "business_travel"
    OTHER = "other"


class InvitationStatus(str, Enum):
    """Status of an invitation.

    ``pending`` is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed from this status."""
        return self is not InvitationStatus.PENDING


class EmailAddress(RootValueObject[str]):
    """Email address, normalized to trimmed lowercase."""

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate with email-validator (no DNS lookup), then lowercase."""
        try:
            validated = validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Valid email is required: {e}") from e
        return validated.normalized.lower()


class InvitationToken(RootValueObject[str]):
    """URL-safe bearer token identifying one invitation."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class Coordinates(ValueObject):
    """Geographic coordinates."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Location(ValueObject):
    """Where a community is based."""

    country: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    coordinates: Coordinates | None = None
