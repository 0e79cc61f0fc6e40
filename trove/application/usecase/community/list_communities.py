"""List communities use case."""

from typing import Optional

from pydantic import BaseModel, Field

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import Pagination
from trove.application.usecase.community.views import CommunityItem, community_items
from trove.domain.repository import CommunitySortField, SortOrder
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityCategory


class ListCommunitiesRequest(BaseModel):
    """List communities request."""

    search: Optional[str] = None
    category: Optional[CommunityCategory] = None
    country: Optional[str] = None
    city: Optional[str] = None
    sort_by: CommunitySortField = CommunitySortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListCommunitiesResponse(BaseModel):
    """One page of communities."""

    communities: list[CommunityItem]
    pagination: Pagination


class ListCommunitiesUseCase(BaseUseCase):
    """Use case for browsing communities."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: ListCommunitiesRequest) -> ListCommunitiesResponse:
        """Filter, sort and paginate live communities."""
        communities, total = await self.community_service.list_communities(
            search=request.search,
            category=request.category,
            country=request.country,
            city=request.city,
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            page=request.page,
            limit=request.limit,
        )
        return ListCommunitiesResponse(
            communities=await community_items(communities, self.user_service),
            pagination=Pagination.of(request.page, request.limit, total),
        )
