"""PostgreSQL implementation of Community repository."""

from typing import Optional

from sqlalchemy import Select, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trove.domain.model import Community
from trove.domain.repository import CommunityRepository, CommunitySortField, SortOrder
from trove.domain.value import CommunityCategory, CommunityId, UserId
from trove.persistence.mappers import community_to_dict, row_to_community
from trove.persistence.tables import communities_table

_live = communities_table.c.deleted_at.is_(None)

_SORT_COLUMNS = {
    CommunitySortField.CREATED_AT: communities_table.c.created_at,
    CommunitySortField.UPDATED_AT: communities_table.c.updated_at,
    CommunitySortField.NAME: communities_table.c.name,
    CommunitySortField.MEMBER_COUNT: func.jsonb_array_length(
        communities_table.c.members
    ),
}


def _apply_filters(
    stmt: Select,
    search: Optional[str],
    category: Optional[CommunityCategory],
    country: Optional[str],
    city: Optional[str],
) -> Select:
    stmt = stmt.where(_live)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                communities_table.c.name.ilike(pattern),
                communities_table.c.description.ilike(pattern),
            )
        )
    if category:
        stmt = stmt.where(communities_table.c.category == category.value)
    if country:
        stmt = stmt.where(
            func.lower(communities_table.c.location["country"].astext)
            == country.lower()
        )
    if city:
        stmt = stmt.where(
            func.lower(communities_table.c.location["city"].astext) == city.lower()
        )
    return stmt


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a live community by ID.

        Args:
            community_id: Community ID to look up

        Returns:
            Community if found and not deleted, None otherwise
        """
        stmt = select(communities_table).where(
            communities_table.c.id == community_id, _live
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    async def find_by_ids(self, community_ids: list[CommunityId]) -> list[Community]:
        """Find several live communities in one query."""
        if not community_ids:
            return []
        stmt = select(communities_table).where(
            communities_table.c.id.in_(community_ids), _live
        )
        result = await self.session.execute(stmt)
        return [row_to_community(dict(row)) for row in result.mappings().all()]

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

        Ties on the sort key are broken by ID so pages are stable.
        """
        column = _SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_order is SortOrder.ASC else column.desc()

        stmt = _apply_filters(select(communities_table), search, category, country, city)
        stmt = (
            stmt.order_by(ordering, communities_table.c.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_community(dict(row)) for row in result.mappings().all()]

    async def count(
        self,
        search: Optional[str] = None,
        category: Optional[CommunityCategory] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
    ) -> int:
        """Count communities matching the listing filters."""
        stmt = _apply_filters(
            select(func.count()).select_from(communities_table),
            search,
            category,
            country,
            city,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_member(self, user_id: UserId) -> list[Community]:
        """Find live communities whose roster contains the user.

        Uses JSONB containment so the GIN index on ``members`` applies.
        """
        stmt = (
            select(communities_table)
            .where(
                communities_table.c.members.contains([{"user_id": str(user_id)}]),
                _live,
            )
            .order_by(communities_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_community(dict(row)) for row in result.mappings().all()]

    async def save(self, community: Community) -> Community:
        """Insert a new community.

        The insert runs in a savepoint so a rejected row leaves the
        request's transaction usable.

        Raises:
            IntegrityError: If a community with this ID already exists
        """
        stmt = insert(communities_table).values(**community_to_dict(community))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return community

    async def compare_and_swap(
        self, community: Community, expected_version: int
    ) -> bool:
        """Replace the stored row only if its version is still ``expected_version``."""
        values = community_to_dict(community)
        values.pop("id")
        values.pop("created_at")
        stmt = (
            update(communities_table)
            .where(
                communities_table.c.id == community.id,
                communities_table.c.version == expected_version,
                _live,
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
