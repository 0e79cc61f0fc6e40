"""In-memory user repository for testing."""

from typing import Optional

from trove.domain.model.user import User
from trove.domain.repository.user import UserRepository
from trove.domain.value import EmailAddress, UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.store.users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users by ID."""
        return [self.store.users[i] for i in user_ids if i in self.store.users]

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by their email."""
        for user in self.store.users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self.store.users[user.id] = user
        return user
