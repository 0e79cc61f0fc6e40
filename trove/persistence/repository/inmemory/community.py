"""In-memory community repository for testing."""

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from trove.domain.model.community import Community
from trove.domain.repository.community import (
    CommunityRepository,
    CommunitySortField,
    SortOrder,
)
from trove.domain.value import CommunityCategory, CommunityId, UserId

from .store import InMemoryStore


def _sort_key(community: Community, sort_by: CommunitySortField) -> Any:
    match sort_by:
        case CommunitySortField.CREATED_AT:
            return community.created_at
        case CommunitySortField.UPDATED_AT:
            return community.updated_at
        case CommunitySortField.NAME:
            return community.name
        case CommunitySortField.MEMBER_COUNT:
            return community.member_count


def _same_text(value: Optional[str], wanted: str) -> bool:
    return value is not None and value.lower() == wanted.lower()


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()

    def _live(self) -> list[Community]:
        return [c for c in self.store.communities.values() if not c.is_deleted]

    def _matching(
        self,
        search: Optional[str],
        category: Optional[CommunityCategory],
        country: Optional[str],
        city: Optional[str],
    ) -> list[Community]:
        communities = self._live()
        if search:
            needle = search.lower()
            communities = [
                c
                for c in communities
                if needle in c.name.lower() or needle in c.description.lower()
            ]
        if category:
            communities = [c for c in communities if c.category == category]
        if country:
            communities = [
                c
                for c in communities
                if c.location and _same_text(c.location.country, country)
            ]
        if city:
            communities = [
                c for c in communities if c.location and _same_text(c.location.city, city)
            ]
        return communities

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a live community by ID."""
        community = self.store.communities.get(community_id)
        if community is None or community.is_deleted:
            return None
        return community

    async def find_by_ids(self, community_ids: list[CommunityId]) -> list[Community]:
        """Find several live communities by ID."""
        found = [self.store.communities.get(i) for i in community_ids]
        return [c for c in found if c is not None and not c.is_deleted]

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
        """Find communities with filtering, sorting and pagination."""
        communities = sorted(
            self._matching(search, category, country, city), key=lambda c: str(c.id)
        )
        communities.sort(
            key=lambda c: _sort_key(c, sort_by),
            reverse=sort_order is SortOrder.DESC,
        )
        return communities[offset : offset + limit]

    async def count(
        self,
        search: Optional[str] = None,
        category: Optional[CommunityCategory] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
    ) -> int:
        """Count communities matching the listing filters."""
        return len(self._matching(search, category, country, city))

    async def find_by_member(self, user_id: UserId) -> list[Community]:
        """Find live communities whose roster contains the user, newest first."""
        communities = [c for c in self._live() if c.is_member(user_id)]
        return sorted(communities, key=lambda c: c.created_at, reverse=True)

    async def save(self, community: Community) -> Community:
        """Insert a new community.

        Raises:
            IntegrityError: If a community with this ID already exists
        """
        if community.id in self.store.communities:
            raise IntegrityError("Duplicate community id", None, Exception())
        self.store.communities[community.id] = community
        return community

    async def compare_and_swap(
        self, community: Community, expected_version: int
    ) -> bool:
        """Replace the stored community if its version is unchanged."""
        current = await self.find_by_id(community.id)
        if current is None or current.version != expected_version:
            return False
        self.store.communities[community.id] = community
        return True
