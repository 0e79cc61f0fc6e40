"""Invitation use cases."""

from trove.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from trove.application.usecase.invitation.expire_invitations import (
    ExpireInvitationsRequest,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
)
from trove.application.usecase.invitation.get_invitation import (
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from trove.application.usecase.invitation.list_invitations import (
    ListCommunityInvitationsRequest,
    ListCommunityInvitationsResponse,
    ListCommunityInvitationsUseCase,
    ListMyInvitationsRequest,
    ListMyInvitationsResponse,
    ListMyInvitationsUseCase,
)
from trove.application.usecase.invitation.respond_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationUseCase,
    DeclineInvitationRequest,
    DeclineInvitationUseCase,
    InvitationMessageResponse,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "DeclineInvitationRequest",
    "DeclineInvitationUseCase",
    "ExpireInvitationsRequest",
    "ExpireInvitationsResponse",
    "ExpireInvitationsUseCase",
    "GetInvitationRequest",
    "GetInvitationResponse",
    "GetInvitationUseCase",
    "InvitationMessageResponse",
    "ListCommunityInvitationsRequest",
    "ListCommunityInvitationsResponse",
    "ListCommunityInvitationsUseCase",
    "ListMyInvitationsRequest",
    "ListMyInvitationsResponse",
    "ListMyInvitationsUseCase",
]
