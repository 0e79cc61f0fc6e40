"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from trove.domain.model.user import User
from trove.domain.value import EmailAddress, UserId


class UserRepository(ABC):
    """Repository for User entity.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users in one round trip.

        Used to resolve member and inviter profiles without N+1 queries.

        Args:
            user_ids: Identifiers to look up (unknown IDs are skipped)

        Returns:
            Users found, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by their (normalized) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
