"""Get community use case."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.application.usecase.community.views import CommunityDetail, resolve_detail
from trove.domain.service import CommunityService, UserService
from trove.domain.value import CommunityId


class GetCommunityRequest(BaseModel):
    """Get community request."""

    community_id: str


class GetCommunityResponse(CommunityDetail):
    """Community with members resolved to profiles."""

    pass


class GetCommunityUseCase(BaseUseCase):
    """Use case for reading one community."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: GetCommunityRequest) -> GetCommunityResponse:
        """Load the community and resolve its roster.

        Raises:
            NotFoundError: If the community does not exist or was deleted
        """
        community = await self.community_service.get_community(
            CommunityId(parse_id(request.community_id, "community"))
        )
        detail = await resolve_detail(community, self.user_service)
        return GetCommunityResponse(**detail.model_dump())
