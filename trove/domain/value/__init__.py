"""Domain value objects for Trove."""

from trove.domain.value.identifiers import CommunityId, InvitationId, UserId
from trove.domain.value.types import (
    CommunityCategory,
    CommunityRole,
    Coordinates,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    Location,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "InvitationId",
    # Types
    "CommunityCategory",
    "CommunityRole",
    "Coordinates",
    "EmailAddress",
    "InvitationStatus",
    "InvitationToken",
    "Location",
]
