"""Community routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from trove.application.usecase.community import (
    ChangeMemberRoleRequest,
    ChangeMemberRoleUseCase,
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
    DeleteCommunityRequest,
    DeleteCommunityResponse,
    DeleteCommunityUseCase,
    GetCommunityRequest,
    GetCommunityResponse,
    GetCommunityUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
    ListMyCommunitiesRequest,
    ListMyCommunitiesResponse,
    ListMyCommunitiesUseCase,
    MembershipRequest,
    MembershipResponse,
    UpdateCommunityRequest,
    UpdateCommunityResponse,
    UpdateCommunityUseCase,
)
from trove.application.usecase.invitation import (
    ListCommunityInvitationsRequest,
    ListCommunityInvitationsResponse,
    ListCommunityInvitationsUseCase,
)
from trove.domain.error import DomainError
from trove.domain.repository import CommunitySortField, SortOrder
from trove.domain.service import JWTService
from trove.domain.value import (
    CommunityCategory,
    CommunityRole,
    InvitationStatus,
    Location,
)
from trove.interface.api.security import authenticate
from trove.interface.error import to_http_exception

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


class CreateCommunityAPIRequest(BaseModel):
    """API request for creating a community."""

    name: str
    description: str = ""
    category: CommunityCategory
    location: Optional[Location] = None
    is_public: bool = True
    max_members: int = 100
    tags: list[str] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)
    cover_image: str = ""


class UpdateCommunityAPIRequest(BaseModel):
    """API request for a partial community update."""

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[CommunityCategory] = None
    location: Optional[Location] = None
    is_public: Optional[bool] = None
    max_members: Optional[int] = None
    tags: Optional[list[str]] = None
    rules: Optional[list[str]] = None
    cover_image: Optional[str] = None


class ChangeRoleAPIRequest(BaseModel):
    role: CommunityRole


@router.post(
    "", response_model=CreateCommunityResponse, status_code=status.HTTP_201_CREATED
)
async def create_community(
    request: CreateCommunityAPIRequest,
    use_case: FromDishka[CreateCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommunityResponse:
    """Create a community; the caller becomes its creator and first admin."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            CreateCommunityRequest(creator_id=user_id, **request.model_dump())
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=ListCommunitiesResponse)
async def list_communities(
    use_case: FromDishka[ListCommunitiesUseCase],
    search: str | None = Query(default=None),
    category: CommunityCategory | None = Query(default=None),
    country: str | None = Query(default=None),
    city: str | None = Query(default=None),
    sort_by: CommunitySortField = Query(default=CommunitySortField.CREATED_AT),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> ListCommunitiesResponse:
    """Browse communities with filters, sorting and pagination.

    Args:
        search: Substring of name or description
        category: Exact category
        country: Location country (case-insensitive)
        city: Location city (case-insensitive)
        sort_by: created_at, updated_at, name or member_count
        sort_order: asc or desc
        page: 1-based page number
        limit: Page size (1-100)
    """
    return await use_case.execute(
        ListCommunitiesRequest(
            search=search,
            category=category,
            country=country,
            city=city,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
    )


@router.get("/mine", response_model=ListMyCommunitiesResponse)
async def list_my_communities(
    use_case: FromDishka[ListMyCommunitiesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListMyCommunitiesResponse:
    """Communities the caller belongs to, newest first."""
    user_id = authenticate(jwt_service, auth_token)
    return await use_case.execute(ListMyCommunitiesRequest(user_id=user_id))


@router.get("/{community_id}", response_model=GetCommunityResponse)
async def get_community(
    community_id: UUID,
    use_case: FromDishka[GetCommunityUseCase],
) -> GetCommunityResponse:
    """Get a community with its members resolved to profiles."""
    try:
        return await use_case.execute(GetCommunityRequest(community_id=str(community_id)))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.patch("/{community_id}", response_model=UpdateCommunityResponse)
async def update_community(
    community_id: UUID,
    request: UpdateCommunityAPIRequest,
    use_case: FromDishka[UpdateCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommunityResponse:
    """Update the fields present in the body (admins only)."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            UpdateCommunityRequest(
                community_id=str(community_id),
                actor_id=user_id,
                **request.model_dump(exclude_unset=True),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/{community_id}", response_model=DeleteCommunityResponse)
async def delete_community(
    community_id: UUID,
    use_case: FromDishka[DeleteCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommunityResponse:
    """Delete a community (creator only); its pending invitations are cancelled."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            DeleteCommunityRequest(community_id=str(community_id), actor_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{community_id}/join", response_model=MembershipResponse)
async def join_community(
    community_id: UUID,
    use_case: FromDishka[JoinCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MembershipResponse:
    """Join a community as a member."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            MembershipRequest(community_id=str(community_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{community_id}/leave", response_model=MembershipResponse)
async def leave_community(
    community_id: UUID,
    use_case: FromDishka[LeaveCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MembershipResponse:
    """Leave a community. The creator cannot leave."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            MembershipRequest(community_id=str(community_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.put("/{community_id}/members/{member_id}/role", response_model=MembershipResponse)
async def change_member_role(
    community_id: UUID,
    member_id: UUID,
    request: ChangeRoleAPIRequest,
    use_case: FromDishka[ChangeMemberRoleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MembershipResponse:
    """Change a member's role (admins only)."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            ChangeMemberRoleRequest(
                community_id=str(community_id),
                actor_id=user_id,
                target_id=str(member_id),
                role=request.role,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{community_id}/invitations", response_model=ListCommunityInvitationsResponse
)
async def list_community_invitations(
    community_id: UUID,
    use_case: FromDishka[ListCommunityInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListCommunityInvitationsResponse:
    """List a community's invitations (admins and moderators only).

    Args:
        status_filter: Optional status; pending excludes expired ones
        limit: Maximum number of results (1-100)
        offset: Number of results to skip
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            ListCommunityInvitationsRequest(
                community_id=str(community_id),
                user_id=user_id,
                status=status_filter,
                limit=limit,
                offset=offset,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
