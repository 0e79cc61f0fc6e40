"""Expire stale invitations use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.domain.service import InvitationService


class ExpireInvitationsRequest(BaseModel):
    as_of: Optional[datetime] = None  # Defaults to the service clock


class ExpireInvitationsResponse(BaseModel):
    expired: int


class ExpireInvitationsUseCase(BaseUseCase):
    """Reconciliation sweep over pending invitations past their deadline."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: ExpireInvitationsRequest) -> ExpireInvitationsResponse:
        expired = await self.invitation_service.expire_stale(request.as_of)
        return ExpireInvitationsResponse(expired=expired)
