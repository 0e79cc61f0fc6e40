"""Domain model entities for Trove."""

from trove.domain.model.community import UPDATABLE_FIELDS, Community, Membership
from trove.domain.model.invitation import Invitation
from trove.domain.model.user import User

__all__ = [
    "Community",
    "Membership",
    "Invitation",
    "User",
    "UPDATABLE_FIELDS",
]
