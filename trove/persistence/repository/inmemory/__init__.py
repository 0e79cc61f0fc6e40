"""In-memory repository implementations for testing."""

from .community import InMemoryCommunityRepository
from .invitation import InMemoryInvitationRepository
from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommunityRepository",
    "InMemoryInvitationRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
