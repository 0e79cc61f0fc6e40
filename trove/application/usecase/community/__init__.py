"""Community use cases."""

from trove.application.usecase.community.create_community import (
    CreateCommunityRequest,
    CreateCommunityResponse,
    CreateCommunityUseCase,
)
from trove.application.usecase.community.delete_community import (
    DeleteCommunityRequest,
    DeleteCommunityResponse,
    DeleteCommunityUseCase,
)
from trove.application.usecase.community.get_community import (
    GetCommunityRequest,
    GetCommunityResponse,
    GetCommunityUseCase,
)
from trove.application.usecase.community.list_communities import (
    ListCommunitiesRequest,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)
from trove.application.usecase.community.list_my_communities import (
    ListMyCommunitiesRequest,
    ListMyCommunitiesResponse,
    ListMyCommunitiesUseCase,
)
from trove.application.usecase.community.membership import (
    ChangeMemberRoleRequest,
    ChangeMemberRoleUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    MembershipRequest,
    MembershipResponse,
)
from trove.application.usecase.community.update_community import (
    UpdateCommunityRequest,
    UpdateCommunityResponse,
    UpdateCommunityUseCase,
)

__all__ = [
    "ChangeMemberRoleRequest",
    "ChangeMemberRoleUseCase",
    "CreateCommunityRequest",
    "CreateCommunityResponse",
    "CreateCommunityUseCase",
    "DeleteCommunityRequest",
    "DeleteCommunityResponse",
    "DeleteCommunityUseCase",
    "GetCommunityRequest",
    "GetCommunityResponse",
    "GetCommunityUseCase",
    "JoinCommunityUseCase",
    "LeaveCommunityUseCase",
    "ListCommunitiesRequest",
    "ListCommunitiesResponse",
    "ListCommunitiesUseCase",
    "ListMyCommunitiesRequest",
    "ListMyCommunitiesResponse",
    "ListMyCommunitiesUseCase",
    "MembershipRequest",
    "MembershipResponse",
    "UpdateCommunityRequest",
    "UpdateCommunityResponse",
    "UpdateCommunityUseCase",
]
