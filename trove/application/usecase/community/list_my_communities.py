"""List the caller's communities use case."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityItem, community_items
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityRole, UserId


class MyCommunityItem(CommunityItem):
    """Community plus the caller's role in it."""

    role: CommunityRole


class ListMyCommunitiesRequest(BaseModel):
    user_id: str  # User ID from auth


class ListMyCommunitiesResponse(BaseModel):
    communities: list[MyCommunityItem]


class ListMyCommunitiesUseCase(BaseUseCase):
    """Use case for listing communities the caller belongs to."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(
        self, request: ListMyCommunitiesRequest
    ) -> ListMyCommunitiesResponse:
        user_id = UserId(parse_id(request.user_id, "user"))
        communities = await self.community_service.list_communities_for_user(user_id)
        items = await community_items(communities, self.user_service)
        return ListMyCommunitiesResponse(
            communities=[
                MyCommunityItem(**item.model_dump(), role=community.role_of(user_id))
                for item, community in zip(items, communities)
            ]
        )
