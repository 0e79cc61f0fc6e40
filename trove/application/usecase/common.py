"""Read-model pieces shared by community and invitation use cases."""

import math
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from trove.domain.error import ValidationError
from trove.domain.model import User


def parse_id(value: str, what: str) -> UUID:
    """Parse a UUID received as text.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {what} ID: {value}")


class UserSummary(BaseModel):
    """Public profile of a user."""

    user_id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None

    @classmethod
    def of(cls, user: User) -> "UserSummary":
        return cls(
            user_id=str(user.id),
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_picture=user.profile_picture,
        )


class Pagination(BaseModel):
    """Page metadata for page/limit listings."""

    current_page: int
    total_pages: int
    total: int
    has_next: bool
    has_prev: bool

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total=total,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
