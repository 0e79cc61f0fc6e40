"""Accept, decline and cancel invitation use cases."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityDetail, resolve_detail
from trove.application.usecase.invitation.get_invitation import parse_token
from trove.application.usecase.invitation.views import InvitationItem
from trove.domain.service import InvitationService, UserService
from trove.domain.value import InvitationId, UserId


class AcceptInvitationRequest(BaseModel):
    token: str
    user_id: str  # User ID from auth


class AcceptInvitationResponse(BaseModel):
    message: str
    invitation: InvitationItem
    community: CommunityDetail


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for joining a community through an invitation."""

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept the invitation as the calling user.

        Raises:
            ExpiredError: If a pending invitation is past its deadline
            ConflictError: If it is no longer pending, the user is already a
                member or the community is full
            ForbiddenError: If the user's email is not the invited one
        """
        accepted = await self.invitation_service.accept(
            parse_token(request.token), UserId(parse_id(request.user_id, "user"))
        )
        return AcceptInvitationResponse(
            message="Invitation accepted successfully",
            invitation=InvitationItem.of(accepted.invitation, accepted.community),
            community=await resolve_detail(accepted.community, self.user_service),
        )


class DeclineInvitationRequest(BaseModel):
    token: str


class InvitationMessageResponse(BaseModel):
    message: str
    invitation: InvitationItem


class DeclineInvitationUseCase(BaseUseCase):
    """Use case for declining an invitation; the token is the only credential."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: DeclineInvitationRequest
    ) -> InvitationMessageResponse:
        declined = await self.invitation_service.decline(parse_token(request.token))
        return InvitationMessageResponse(
            message="Invitation declined successfully",
            invitation=InvitationItem.of(declined),
        )


class CancelInvitationRequest(BaseModel):
    invitation_id: str
    user_id: str  # User ID from auth


class CancelInvitationUseCase(BaseUseCase):
    """Use case for withdrawing an invitation (original inviter only)."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: CancelInvitationRequest
    ) -> InvitationMessageResponse:
        cancelled = await self.invitation_service.cancel(
            InvitationId(parse_id(request.invitation_id, "invitation")),
            UserId(parse_id(request.user_id, "user")),
        )
        return InvitationMessageResponse(
            message="Invitation cancelled successfully",
            invitation=InvitationItem.of(cancelled),
        )
