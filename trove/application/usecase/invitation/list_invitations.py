"""Invitation listing use cases."""

from typing import Optional

from pydantic import BaseModel, Field

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.invitation.views import InvitationItem, invitation_items
from trove.domain.service import CommunityService, InvitationService, UserService
from trove.domain.value import CommunityId, InvitationStatus, UserId


class ListCommunityInvitationsRequest(BaseModel):
    """List a community's invitations."""

    community_id: str
    user_id: str  # User ID from auth
    status: Optional[InvitationStatus] = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListCommunityInvitationsResponse(BaseModel):
    invitations: list[InvitationItem]
    total: int


class ListCommunityInvitationsUseCase(BaseUseCase):
    """Use case for staff reviewing a community's invitations."""

    def __init__(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> None:
        self.invitation_service = invitation_service
        self.community_service = community_service
        self.user_service = user_service

    async def execute(
        self, request: ListCommunityInvitationsRequest
    ) -> ListCommunityInvitationsResponse:
        """List invitations newest first, statuses as of now.

        Raises:
            ForbiddenError: If the caller is not an admin or moderator
        """
        invitations, total = await self.invitation_service.list_for_community(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.user_id, "user")),
            status=request.status,
            limit=request.limit,
            offset=request.offset,
        )
        return ListCommunityInvitationsResponse(
            invitations=await invitation_items(
                invitations, self.community_service, self.user_service
            ),
            total=total,
        )


class ListMyInvitationsRequest(BaseModel):
    user_id: str  # User ID from auth


class ListMyInvitationsResponse(BaseModel):
    invitations: list[InvitationItem]


class ListMyInvitationsUseCase(BaseUseCase):
    """Use case for an invitee's inbox of live invitations."""

    def __init__(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> None:
        self.invitation_service = invitation_service
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: ListMyInvitationsRequest) -> ListMyInvitationsResponse:
        invitations = await self.invitation_service.list_for_user(
            UserId(parse_id(request.user_id, "user"))
        )
        return ListMyInvitationsResponse(
            invitations=await invitation_items(
                invitations, self.community_service, self.user_service
            )
        )
