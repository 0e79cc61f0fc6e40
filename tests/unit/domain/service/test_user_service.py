"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from trove.domain.error import NotFoundError
from trove.domain.service import UserService
from trove.domain.value import EmailAddress, UserId
from trove.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user


class TestUserLookups:
    """Tests for the read helpers used by the invitation flow."""

    @pytest.mark.asyncio
    async def test_get_by_id_raises_for_unknown_user(self):
        service = UserService(InMemoryUserRepository())

        with pytest.raises(NotFoundError, match="User not found"):
            await service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_user_by_email_is_case_insensitive(self):
        """Emails are normalized before comparison."""
        # Arrange
        repo = InMemoryUserRepository()
        service = UserService(repo)
        bob = await repo.save(make_user("bob", "Bob@Example.com"))

        # Act
        found = await service.get_user_by_email(EmailAddress("  BOB@example.COM "))

        # Assert
        assert found is not None
        assert found.id == bob.id

    @pytest.mark.asyncio
    async def test_get_users_by_ids_skips_unknown_and_duplicates(self):
        repo = InMemoryUserRepository()
        service = UserService(repo)
        alice = await repo.save(make_user("alice"))

        users = await service.get_users_by_ids([alice.id, alice.id, UserId(uuid4())])

        assert list(users) == [alice.id]
        assert await service.get_users_by_ids([]) == {}
