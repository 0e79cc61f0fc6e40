"""Community read models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from trove.application.usecase.common import UserSummary
from trove.domain.model import Community, User
from trove.domain.service import UserService
from trove.domain.value import CommunityCategory, CommunityRole, Location, UserId


class CommunityItem(BaseModel):
    """Community as shown in listings."""

    community_id: str
    name: str
    description: str
    category: CommunityCategory
    location: Optional[Location] = None
    is_public: bool
    max_members: int
    member_count: int
    tags: list[str]
    rules: list[str]
    cover_image: str
    creator: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime


class MemberItem(BaseModel):
    """One roster entry with the member's profile."""

    user: Optional[UserSummary] = None
    user_id: str
    role: CommunityRole
    joined_at: datetime


class CommunityDetail(CommunityItem):
    """Community with its resolved roster."""

    members: list[MemberItem]


def community_item(community: Community, users: dict[UserId, User]) -> CommunityItem:
    """Build a listing item; ``users`` should contain the creator."""
    creator = users.get(community.creator_id)
    return CommunityItem(
        community_id=str(community.id),
        name=community.name,
        description=community.description,
        category=community.category,
        location=community.location,
        is_public=community.is_public,
        max_members=community.max_members,
        member_count=community.member_count,
        tags=list(community.tags),
        rules=list(community.rules),
        cover_image=community.cover_image,
        creator=UserSummary.of(creator) if creator else None,
        created_at=community.created_at,
        updated_at=community.updated_at,
    )


def community_detail(community: Community, users: dict[UserId, User]) -> CommunityDetail:
    """Build the detail view; ``users`` should contain every member."""
    members = []
    for membership in community.members:
        user = users.get(membership.user_id)
        members.append(
            MemberItem(
                user=UserSummary.of(user) if user else None,
                user_id=str(membership.user_id),
                role=membership.role,
                joined_at=membership.joined_at,
            )
        )
    return CommunityDetail(
        **community_item(community, users).model_dump(), members=members
    )


async def community_items(
    communities: list[Community], user_service: UserService
) -> list[CommunityItem]:
    """Build listing items, resolving every creator in one lookup."""
    users = await user_service.get_users_by_ids([c.creator_id for c in communities])
    return [community_item(c, users) for c in communities]


async def resolve_detail(
    community: Community, user_service: UserService
) -> CommunityDetail:
    """Build the detail view, resolving the whole roster in one lookup."""
    users = await user_service.get_users_by_ids(
        [m.user_id for m in community.members]
    )
    return community_detail(community, users)
