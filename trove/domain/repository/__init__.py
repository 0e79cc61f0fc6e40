"""Repository interfaces for Trove domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from trove.domain.repository.community import (
    CommunityRepository,
    CommunitySortField,
    SortOrder,
)
from trove.domain.repository.invitation import InvitationRepository
from trove.domain.repository.unit_of_work import UnitOfWork
from trove.domain.repository.user import UserRepository

__all__ = [
    "CommunityRepository",
    "CommunitySortField",
    "SortOrder",
    "InvitationRepository",
    "UnitOfWork",
    "UserRepository",
]
