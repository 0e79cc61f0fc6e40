"""Community aggregate root.

A community is a named group with an ordered roster of members and one
permanent creator, who is always on the roster as an admin.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, field_validator, model_validator

from trove.domain.error import ConflictError
from trove.domain.model.common import DomainModel
from trove.domain.value import (
    CommunityCategory,
    CommunityId,
    CommunityRole,
    Location,
    UserId,
)

RuleText = Annotated[str, Field(min_length=1, max_length=200)]

# Fields an admin may change through a partial update
UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "category",
        "location",
        "is_public",
        "max_members",
        "tags",
        "rules",
        "cover_image",
    }
)


class Membership(DomainModel):
    """One roster entry."""

    user_id: UserId
    role: CommunityRole = CommunityRole.MEMBER
    joined_at: datetime


class Community(DomainModel):
    """Community aggregate root.

    Business rules:
    - The creator is always a member with the admin role
    - A user appears at most once in ``members``
    - ``version`` increases by one on every persisted change
    """

    id: CommunityId
    name: str = Field(min_length=3, max_length=100)
    description: str = Field(max_length=500)
    category: CommunityCategory
    creator_id: UserId
    members: tuple[Membership, ...]
    location: Optional[Location] = None
    is_public: bool = True
    max_members: int = Field(default=100, ge=2, le=1000)
    tags: tuple[str, ...] = ()
    rules: tuple[RuleText, ...] = ()
    cover_image: str = ""
    version: int = Field(default=1, ge=1)
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v: object) -> object:
        """Trim tags and drop blanks."""
        if isinstance(v, (list, tuple)):
            return tuple(t.strip() for t in v if isinstance(t, str) and t.strip())
        return v

    @model_validator(mode="after")
    def validate_roster(self) -> "Community":
        """Enforce creator and uniqueness invariants."""
        seen: set[UserId] = set()
        for membership in self.members:
            if membership.user_id in seen:
                raise ValueError("A user can appear only once in members")
            seen.add(membership.user_id)

        creator = self.member(self.creator_id)
        if creator is None or creator.role is not CommunityRole.ADMIN:
            raise ValueError("The creator must remain a member with the admin role")
        return self

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.max_members

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def member(self, user_id: UserId) -> Membership | None:
        """Find the roster entry for a user."""
        for membership in self.members:
            if membership.user_id == user_id:
                return membership
        return None

    def role_of(self, user_id: UserId) -> CommunityRole | None:
        membership = self.member(user_id)
        return membership.role if membership else None

    def is_member(self, user_id: UserId) -> bool:
        return self.member(user_id) is not None

    def is_creator(self, user_id: UserId) -> bool:
        return self.creator_id == user_id

    def with_member(
        self, user_id: UserId, role: CommunityRole, joined_at: datetime
    ) -> "Community":
        """Append a member to the roster.

        Raises:
            ConflictError: If the user is already a member or the roster is full
        """
        if self.is_member(user_id):
            raise ConflictError("User is already a member of this community")
        if self.is_full:
            raise ConflictError("Community has reached its member limit")

        entry = Membership(user_id=user_id, role=role, joined_at=joined_at)
        return self.revise(members=(*self.members, entry))

    def without_member(self, user_id: UserId) -> "Community":
        """Remove a member from the roster."""
        return self.revise(
            members=tuple(m for m in self.members if m.user_id != user_id)
        )

    def with_role(self, user_id: UserId, role: CommunityRole) -> "Community":
        """Change one member's role, keeping roster order."""
        return self.revise(
            members=tuple(
                m.revise(role=role) if m.user_id == user_id else m
                for m in self.members
            )
        )
