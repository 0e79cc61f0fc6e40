"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from trove.domain.model import Community, Invitation, Membership, User
from trove.domain.value import (
    CommunityCategory,
    CommunityId,
    CommunityRole,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)

# Traces stay local; nothing is sent to Logfire from tests
logfire.configure(send_to_logfire=False, console=False)

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_user(username: str, email: str | None = None) -> User:
    """Build a registered user with a fresh ID."""
    return User(
        id=UserId(uuid4()),
        username=username,
        email=EmailAddress(email or f"{username}@example.com"),
        first_name=username.capitalize(),
        created_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )


def make_community(
    creator_id: UserId,
    members: dict[UserId, CommunityRole] | None = None,
    max_members: int = 100,
    name: str = "Alpine Club",
) -> Community:
    """Build a community whose roster is the creator plus ``members``."""
    roster = [Membership(user_id=creator_id, role=CommunityRole.ADMIN, joined_at=NOW)]
    roster += [
        Membership(user_id=user_id, role=role, joined_at=NOW)
        for user_id, role in (members or {}).items()
    ]
    return Community(
        id=CommunityId(uuid4()),
        name=name,
        description="Weekend hikes above 2000m",
        category=CommunityCategory.ADVENTURE,
        creator_id=creator_id,
        members=tuple(roster),
        max_members=max_members,
        created_at=NOW,
        updated_at=NOW,
    )


def make_invitation(
    community_id: CommunityId,
    inviter_id: UserId,
    email: str = "bob@example.com",
    status: InvitationStatus = InvitationStatus.PENDING,
    ttl: timedelta = timedelta(days=7),
) -> Invitation:
    """Build an invitation created at ``NOW`` with a random digest."""
    return Invitation(
        id=InvitationId(uuid4()),
        community_id=community_id,
        inviter_id=inviter_id,
        invitee_email=EmailAddress(email),
        token_digest=uuid4().hex + uuid4().hex,
        status=status,
        expires_at=NOW + ttl,
        created_at=NOW,
    )
