"""PostgreSQL repository implementations."""

from trove.persistence.repository.community import PostgresCommunityRepository
from trove.persistence.repository.invitation import PostgresInvitationRepository
from trove.persistence.repository.unit_of_work import PostgresUnitOfWork
from trove.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCommunityRepository",
    "PostgresInvitationRepository",
    "PostgresUnitOfWork",
]
