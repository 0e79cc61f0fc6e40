"""Get invitation by token use case."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.invitation.views import InvitationItem
from trove.domain.error import ValidationError
from trove.domain.service import InvitationService
from trove.domain.value import InvitationToken


def parse_token(token: str) -> InvitationToken:
    """Wrap a presented token.

    Raises:
        ValidationError: If the token is empty or too long
    """
    if not 1 <= len(token) <= 255:
        raise ValidationError("Invalid invitation token")
    return InvitationToken(token)


class GetInvitationRequest(BaseModel):
    token: str


class GetInvitationResponse(BaseModel):
    invitation: InvitationItem


class GetInvitationUseCase(BaseUseCase):
    """Use case for opening an emailed invitation link."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        """Resolve the token to the invitation, its community and inviter.

        Raises:
            NotFoundError: If the token is unknown
            ExpiredError: If a pending invitation is past its deadline
        """
        view = await self.invitation_service.get_by_token(parse_token(request.token))
        return GetInvitationResponse(
            invitation=InvitationItem.of(view.invitation, view.community, view.inviter)
        )
