"""Delete community use case."""

from pydantic import BaseModel

from trove.application.usecase.base import BaseUseCase
from trove.application.usecase.common import parse_id
from trove.domain.service import CommunityService
from trove.domain.value import CommunityId, UserId


class DeleteCommunityRequest(BaseModel):
    community_id: str
    actor_id: str  # User ID from auth


class DeleteCommunityResponse(BaseModel):
    message: str


class DeleteCommunityUseCase(BaseUseCase):
    """Use case for soft-deleting a community (creator only)."""

    def __init__(self, community_service: CommunityService) -> None:
        self.community_service = community_service

    async def execute(self, request: DeleteCommunityRequest) -> DeleteCommunityResponse:
        await self.community_service.delete_community(
            CommunityId(parse_id(request.community_id, "community")),
            UserId(parse_id(request.actor_id, "user")),
        )
        return DeleteCommunityResponse(message="Community deleted successfully")
