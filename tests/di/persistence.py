"""Mock persistence providers for testing."""

from dishka import Scope, provide

from trove.domain.repository import (
    CommunityRepository,
    InvitationRepository,
    UnitOfWork,
    UserRepository,
)
from trove.persistence.repository.inmemory import (
    InMemoryCommunityRepository,
    InMemoryInvitationRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from trove.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so every request against one container sees the
    same data; each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_community_repository(self, store: InMemoryStore) -> CommunityRepository:
        """Provide in-memory community repository."""
        return InMemoryCommunityRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, store: InMemoryStore) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, store: InMemoryStore) -> UnitOfWork:
        """Provide snapshot-based unit of work."""
        return InMemoryUnitOfWork(store)
