"""User entity.

Accounts are owned by the account service; this API reads them to match
invitation emails and to show member profiles.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from trove.domain.model.common import DomainModel
from trove.domain.value import EmailAddress, UserId


class User(DomainModel):
    """Registered user."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    email: EmailAddress
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime

    @property
    def display_name(self) -> str:
        """Full name when known, otherwise the username."""
        full_name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full_name or self.username
