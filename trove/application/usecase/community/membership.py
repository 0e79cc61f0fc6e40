"""Join, leave and role-change use cases."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityDetail, resolve_detail
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityId, CommunityRole, UserId


class MembershipRequest(BaseModel):
    """Join or leave request."""

    community_id: str
    user_id: str  # User ID from auth


class MembershipResponse(BaseModel):
    message: str
    community: CommunityDetail


class JoinCommunityUseCase(BaseUseCase):
    """Use case for self-service joining."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Join as a plain member.

        Raises:
            ConflictError: If already a member or the community is full
        """
        community = await self.community_service.join_community(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.user_id, "user")),
        )
        return MembershipResponse(
            message="Successfully joined community",
            community=await resolve_detail(community, self.user_service),
        )


class LeaveCommunityUseCase(BaseUseCase):
    """Use case for leaving a community."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: MembershipRequest) -> MembershipResponse:
        """Leave the community.

        Raises:
            ForbiddenError: If the caller is the creator or not a member
        """
        community = await self.community_service.leave_community(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.user_id, "user")),
        )
        return MembershipResponse(
            message="Successfully left community",
            community=await resolve_detail(community, self.user_service),
        )


class ChangeMemberRoleRequest(BaseModel):
    community_id: str
    actor_id: str  # User ID from auth
    target_id: str
    role: CommunityRole


class ChangeMemberRoleUseCase(BaseUseCase):
    """Use case for promoting or demoting a member (admins only)."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: ChangeMemberRoleRequest) -> MembershipResponse:
        community = await self.community_service.change_member_role(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.actor_id, "user")),
            UserId(parse_id(request.target_id, "user")),
            request.role,
        )
        return MembershipResponse(
            message=f"Member role changed to {request.role.value}",
            community=await resolve_detail(community, self.user_service),
        )
