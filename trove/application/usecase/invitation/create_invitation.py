"""Create invitation use case."""

from pydantic import BaseModel, Field

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.invitation.views import InvitationItem, invitation_items
from trove.domain.service import CommunityService, InvitationService, UserService
from trove.domain.value import CommunityId, UserId


class CreateInvitationRequest(BaseModel):
    """Request to invite an email address to a community."""

    community_id: str
    inviter_id: str  # User ID from auth
    email: str
    message: str = Field(default="", max_length=500)


class CreateInvitationResponse(BaseModel):
    """Created invitation. The token only travels in the emailed link."""

    invitation: InvitationItem


class CreateInvitationUseCase(BaseUseCase):
    """Use case for sending an invitation."""

    def __init__(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            community_service: Community domain service (read model)
            user_service: User domain service (read model)
        """
        self.invitation_service = invitation_service
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: CreateInvitationRequest) -> CreateInvitationResponse:
        """Issue the invitation and hand it to the dispatcher.

        Raises:
            ForbiddenError: If the inviter is not an admin or moderator
            ConflictError: If the invitee is a member or already invited
            ValidationError: If the email is malformed
        """
        issued = await self.invitation_service.invite(
            community_id=CommunityId(parse_id(request.community_id, "community")),
            email=request.email,
            inviter_id=UserId(parse_id(request.inviter_id, "user")),
            message=request.message,
        )
        [item] = await invitation_items(
            [issued.invitation], self.community_service, self.user_service
        )
        return CreateInvitationResponse(invitation=item)
