"""Community repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from trove.domain.model.community import Community
from trove.domain.value import CommunityCategory, CommunityId, UserId


class CommunitySortField(str, Enum):
    """Sortable fields for community listings."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    NAME = "name"
    MEMBER_COUNT = "member_count"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class CommunityRepository(ABC):
    """Repository for Community aggregate.

    Roster and field changes go through ``compare_and_swap`` so that two
    writers working from the same snapshot cannot both succeed.
    Soft-deleted communities are never returned.
    """

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a live community by ID.

        Args:
            community_id: The community's unique identifier

        Returns:
            The community if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, community_ids: list[CommunityId]) -> list[Community]:
        """Find several live communities in one round trip."""
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        category: Optional[CommunityCategory] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
        sort_by: CommunitySortField = CommunitySortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Community]:
        """Find communities with filtering, sorting and pagination.

        Args:
            search: Case-insensitive substring of name or description
            category: Exact category
            country: Case-insensitive country match
            city: Case-insensitive city match
            sort_by: Field to sort by
            sort_order: Sort direction
            limit: Maximum number of communities to return
            offset: Number of communities to skip

        Returns:
            Matching communities
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[str] = None,
        category: Optional[CommunityCategory] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
    ) -> int:
        """Count communities matching the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def find_by_member(self, user_id: UserId) -> list[Community]:
        """Find communities whose roster contains the user, newest first."""
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Insert a new community.

        Args:
            community: The community to insert (version 1)

        Returns:
            The saved community

        Raises:
            IntegrityError: If a community with this ID already exists
        """
        pass

    @abstractmethod
    async def compare_and_swap(
        self, community: Community, expected_version: int
    ) -> bool:
        """Replace the stored community if its version is unchanged.

        Args:
            community: New state (its ``version`` should be expected + 1)
            expected_version: Version the caller read before mutating

        Returns:
            True if written, False if another writer got there first
        """
        pass
