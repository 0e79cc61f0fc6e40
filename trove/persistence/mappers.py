"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from trove.domain.model import Community, Invitation, Membership, User
from trove.domain.value import (
    CommunityCategory,
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    Location,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=EmailAddress(row["email"]),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        profile_picture=row.get("profile_picture"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump(exclude={"email"})
    data["email"] = user.email.root
    return data


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model.

    The roster is stored as JSONB; its entries are validated back into
    ``Membership`` models, keeping their stored order.

    Args:
        row: Database row as dict

    Returns:
        Community domain model
    """
    location = row.get("location")
    return Community(
        id=CommunityId(_uuid(row["id"])),
        name=row["name"],
        description=row["description"],
        category=CommunityCategory(row["category"]),
        creator_id=UserId(_uuid(row["creator_id"])),
        members=tuple(Membership.model_validate(m) for m in row["members"]),
        location=Location.model_validate(location) if location else None,
        is_public=row["is_public"],
        max_members=row["max_members"],
        tags=tuple(row.get("tags") or ()),
        rules=tuple(row.get("rules") or ()),
        cover_image=row.get("cover_image") or "",
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def community_to_dict(community: Community) -> Dict[str, Any]:
    """Convert Community domain model to database dict.

    Args:
        community: Community domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": community.id,
        "name": community.name,
        "description": community.description,
        "category": community.category.value,
        "creator_id": community.creator_id,
        "members": [m.model_dump(mode="json") for m in community.members],
        "location": (
            community.location.model_dump(mode="json") if community.location else None
        ),
        "is_public": community.is_public,
        "max_members": community.max_members,
        "tags": list(community.tags),
        "rules": list(community.rules),
        "cover_image": community.cover_image,
        "version": community.version,
        "created_at": community.created_at,
        "updated_at": community.updated_at,
        "deleted_at": community.deleted_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    invitee_user_id = row.get("invitee_user_id")
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        inviter_id=UserId(_uuid(row["inviter_id"])),
        invitee_email=EmailAddress(row["invitee_email"]),
        invitee_user_id=UserId(_uuid(invitee_user_id)) if invitee_user_id else None,
        token_digest=row["token_digest"],
        message=row.get("message") or "",
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
        declined_at=row.get("declined_at"),
        cancelled_at=row.get("cancelled_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    return {
        "id": invitation.id,
        "community_id": invitation.community_id,
        "inviter_id": invitation.inviter_id,
        "invitee_email": invitation.invitee_email.root,
        "invitee_user_id": invitation.invitee_user_id,
        "token_digest": invitation.token_digest,
        "message": invitation.message,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "accepted_at": invitation.accepted_at,
        "declined_at": invitation.declined_at,
        "cancelled_at": invitation.cancelled_at,
    }
