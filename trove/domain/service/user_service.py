"""User domain service."""

import logfire

from trove.domain.error import NotFoundError
from trove.domain.model import User
from trove.domain.repository import UserRepository
from trove.domain.value import EmailAddress, UserId

from .base import Service


class UserService(Service):
    """Read access to registered users."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: EmailAddress) -> User | None:
        """Get user by normalized email, if registered."""
        with logfire.span("user_service.get_user_by_email"):
            return await self.user_repository.find_by_email(email)

    async def get_users_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Resolve many users at once, keyed by ID.

        Args:
            user_ids: IDs to resolve (duplicates are fine)

        Returns:
            Mapping of found users; unknown IDs are absent
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        with logfire.span("user_service.get_users_by_ids", count=len(unique_ids)):
            users = await self.user_repository.find_by_ids(unique_ids)
            return {user.id: user for user in users}

    async def save(self, user: User) -> User:
        """Save a user."""
        with logfire.span("user_service.save", user_id=str(user.id)):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id))
            return saved
