"""Invitation read models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from trove.application.usecase.common import UserSummary
from trove.domain.model import Community, Invitation, User
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityId, InvitationStatus, UserId


class CommunityBrief(BaseModel):
    """Just enough of a community to describe an invitation."""

    community_id: str
    name: str
    description: str

    @classmethod
    def of(cls, community: Community) -> "CommunityBrief":
        return cls(
            community_id=str(community.id),
            name=community.name,
            description=community.description,
        )


class InvitationItem(BaseModel):
    """Invitation without its token."""

    invitation_id: str
    community_id: str
    inviter_id: str
    invitee_email: str
    invitee_user_id: Optional[str] = None
    message: str
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime
    accepted_at: Optional[datetime] = None
    declined_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    community: Optional[CommunityBrief] = None
    inviter: Optional[UserSummary] = None

    @classmethod
    def of(
        cls,
        invitation: Invitation,
        community: Optional[Community] = None,
        inviter: Optional[User] = None,
    ) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            community_id=str(invitation.community_id),
            inviter_id=str(invitation.inviter_id),
            invitee_email=invitation.invitee_email.root,
            invitee_user_id=(
                str(invitation.invitee_user_id) if invitation.invitee_user_id else None
            ),
            message=invitation.message,
            status=invitation.status,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            accepted_at=invitation.accepted_at,
            declined_at=invitation.declined_at,
            cancelled_at=invitation.cancelled_at,
            community=CommunityBrief.of(community) if community else None,
            inviter=UserSummary.of(inviter) if inviter else None,
        )


async def invitation_items(
    invitations: list[Invitation],
    community_service: CommunityService,
    user_service: UserService,
) -> list[InvitationItem]:
    """Build items, resolving communities and inviters in one lookup each."""
    communities: dict[CommunityId, Community] = (
        await community_service.get_communities_by_ids(
            [i.community_id for i in invitations]
        )
    )
    inviters: dict[UserId, User] = await user_service.get_users_by_ids(
        [i.inviter_id for i in invitations]
    )
    return [
        InvitationItem.of(i, communities.get(i.community_id), inviters.get(i.inviter_id))
        for i in invitations
    ]
