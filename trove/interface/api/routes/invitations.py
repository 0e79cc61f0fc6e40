"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from trove.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    DeclineInvitationRequest,
    DeclineInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
    InvitationMessageResponse,
    ListMyInvitationsRequest,
    ListMyInvitationsResponse,
    ListMyInvitationsUseCase,
)
from trove.domain.error import DomainError
from trove.domain.service import JWTService
from trove.interface.api.security import authenticate
from trove.interface.error import to_http_exception

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting someone by email."""

    community_id: UUID
    email: str
    message: str = Field(default="", max_length=500)


@router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInvitationResponse:
    """Invite an email address to a community.

    The token is only delivered in the notification email, never in the
    response.

    Raises:
        HTTPException: 403 if the caller may not invite, 409 if the address
            is already a member or already has a live invitation
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            CreateInvitationRequest(
                community_id=str(request.community_id),
                inviter_id=user_id,
                email=request.email,
                message=request.message,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/mine", response_model=ListMyInvitationsResponse)
async def list_my_invitations(
    use_case: FromDishka[ListMyInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListMyInvitationsResponse:
    """Live invitations addressed to the caller's email."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(ListMyInvitationsRequest(user_id=user_id))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/token/{token}", response_model=GetInvitationResponse)
async def get_invitation(
    token: str,
    use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Look up an invitation by its token (no authentication required).

    Raises:
        HTTPException: 404 if unknown, 410 if expired
    """
    try:
        return await use_case.execute(GetInvitationRequest(token=token))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/token/{token}/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    token: str,
    use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInvitationResponse:
    """Accept an invitation; the caller's email must match the invitee."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            AcceptInvitationRequest(token=token, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/token/{token}/decline", response_model=InvitationMessageResponse)
async def decline_invitation(
    token: str,
    use_case: FromDishka[DeclineInvitationUseCase],
) -> InvitationMessageResponse:
    """Decline an invitation. Holding the token is enough."""
    try:
        return await use_case.execute(DeclineInvitationRequest(token=token))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/{invitation_id}", response_model=InvitationMessageResponse)
async def cancel_invitation(
    invitation_id: UUID,
    use_case: FromDishka[CancelInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InvitationMessageResponse:
    """Cancel a pending invitation (original inviter only)."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            CancelInvitationRequest(invitation_id=str(invitation_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
