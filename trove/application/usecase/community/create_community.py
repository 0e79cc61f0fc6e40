"""Create community use case."""

from typing import Optional

from pydantic import BaseModel, Field

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityDetail, resolve_detail
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityCategory, Location, UserId


class CreateCommunityRequest(BaseModel):
    """Request to create a community."""

    creator_id: str  # User ID from auth
    name: str
    description: str = ""
    category: CommunityCategory
    location: Optional[Location] = None
    is_public: bool = True
    max_members: int = 100
    tags: list[str] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)
    cover_image: str = ""


class CreateCommunityResponse(CommunityDetail):
    """Created community with its single-admin roster."""

    pass


class CreateCommunityUseCase(BaseUseCase):
    """Use case for founding a community."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        """Initialize use case.

        Args:
            community_service: Community domain service
            user_service: User domain service
        """
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: CreateCommunityRequest) -> CreateCommunityResponse:
        """Create the community; the caller becomes creator and admin."""
        community = await self.community_service.create_community(
            creator_id=UserId(parse_id(request.creator_id, "user")),
            name=request.name,
            description=request.description,
            category=request.category,
            location=request.location,
            is_public=request.is_public,
            max_members=request.max_members,
            tags=request.tags,
            rules=request.rules,
            cover_image=request.cover_image,
        )
        detail = await resolve_detail(community, self.user_service)
        return CreateCommunityResponse(**detail.model_dump())
