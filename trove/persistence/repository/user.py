"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from trove.domain.model import User
from trove.domain.repository import UserRepository
from trove.domain.value import EmailAddress, UserId
from trove.persistence.mappers import row_to_user, user_to_dict
from trove.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users in one query."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by their normalized email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Insert a user or update the existing row with the same ID."""
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
