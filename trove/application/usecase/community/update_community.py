"""Update community use case."""

from typing import Optional

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityDetail, resolve_detail
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityCategory, CommunityId, Location, UserId


class UpdateCommunityRequest(BaseModel):
    """Partial update; only fields that were explicitly set are applied."""

    community_id: str
    actor_id: str  # User ID from auth
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[CommunityCategory] = None
    location: Optional[Location] = None
    is_public: Optional[bool] = None
    max_members: Optional[int] = None
    tags: Optional[list[str]] = None
    rules: Optional[list[str]] = None
    cover_image: Optional[str] = None


class UpdateCommunityResponse(CommunityDetail):
    pass


class UpdateCommunityUseCase(BaseUseCase):
    """Use case for editing community fields (admins only)."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: UpdateCommunityRequest) -> UpdateCommunityResponse:
        """Merge the set fields into the community.

        Raises:
            ForbiddenError: If the actor is not an admin
            ValidationError: If a value is out of bounds
        """
        changes = request.model_dump(
            exclude_unset=True, exclude={"community_id", "actor_id"}
        )
        community = await self.community_service.update_community(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.actor_id, "user")),
            changes,
        )
        detail = await resolve_detail(community, self.user_service)
        return UpdateCommunityResponse(**detail.model_dump())
