"""Community domain service (the community registry)."""

from datetime import datetime
from typing import Any, Callable, Iterable, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from trove.domain import policy
from trove.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from trove.domain.model import UPDATABLE_FIELDS, Community, Membership
from trove.domain.model.common import describe_validation_error
from trove.domain.policy import CommunityAction
from trove.domain.repository import (
    CommunityRepository,
    CommunitySortField,
    InvitationRepository,
    SortOrder,
    UnitOfWork,
)
from trove.domain.value import (
    CommunityCategory,
    CommunityId,
    CommunityRole,
    Location,
    UserId,
)

from .base import Service
from .clock import Clock

Change = Callable[[Community, datetime], Community]


class CommunityService(Service):
    """Owns the Community aggregate.

    Every change is computed from a fresh snapshot and written with a
    compare-and-swap on ``version``. A lost race reloads, re-checks the
    role policy against the new snapshot and tries again.
    """

    def __init__(
        self,
        community_repository: CommunityRepository,
        invitation_repository: InvitationRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
        max_write_attempts: int = 3,
    ) -> None:
        """Initialize community service.

        Args:
            community_repository: Community repository
            invitation_repository: Invitation repository (delete cascade)
            unit_of_work: Atomic block for multi-aggregate writes
            clock: Time source
            max_write_attempts: Compare-and-swap attempts before giving up
        """
        self.community_repository = community_repository
        self.invitation_repository = invitation_repository
        self.unit_of_work = unit_of_work
        self.clock = clock
        self.max_write_attempts = max_write_attempts

    async def create_community(
        self,
        creator_id: UserId,
        name: str,
        description: str,
        category: CommunityCategory,
        location: Optional[Location] = None,
        is_public: bool = True,
        max_members: int = 100,
        tags: Iterable[str] = (),
        rules: Iterable[str] = (),
        cover_image: str = "",
    ) -> Community:
        """Create a community with the creator as its first admin.

        Raises:
            ValidationError: If a field is out of bounds
        """
        with logfire.span(
            "community_service.create_community",
            creator_id=str(creator_id),
            name=name,
            category=category.value,
        ):
            now = self.clock.now()
            try:
                community = Community(
                    id=CommunityId(uuid4()),
                    name=name,
                    description=description,
                    category=category,
                    creator_id=creator_id,
                    members=(
                        Membership(
                            user_id=creator_id,
                            role=CommunityRole.ADMIN,
                            joined_at=now,
                        ),
                    ),
                    location=location,
                    is_public=is_public,
                    max_members=max_members,
                    tags=tuple(tags),
                    rules=tuple(rules),
                    cover_image=cover_image,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            saved = await self.community_repository.save(community)
            logfire.info(
                "Community created",
                community_id=str(saved.id),
                creator_id=str(creator_id),
            )
            return saved

    async def get_community(self, community_id: CommunityId) -> Community:
        """Get a live community.

        Raises:
            NotFoundError: If the community does not exist or was deleted
        """
        community = await self.community_repository.find_by_id(community_id)
        if not community:
            logfire.warn("Community not found", community_id=str(community_id))
            raise NotFoundError("Community", str(community_id))
        return community

    async def get_communities_by_ids(
        self, community_ids: list[CommunityId]
    ) -> dict[CommunityId, Community]:
        """Resolve many communities at once, keyed by ID."""
        unique_ids = list(dict.fromkeys(community_ids))
        if not unique_ids:
            return {}
        communities = await self.community_repository.find_by_ids(unique_ids)
        return {community.id: community for community in communities}

    async def list_communities(
        self,
        search: Optional[str] = None,
        category: Optional[CommunityCategory] = None,
        country: Optional[str] = None,
        city: Optional[str] = None,
        sort_by: CommunitySortField = CommunitySortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Community], int]:
        """List communities with filters and page-based pagination.

        Returns:
            Tuple of (communities on the page, total matching)
        """
        with logfire.span(
            "community_service.list_communities",
            search=search,
            category=category.value if category else None,
            sort_by=sort_by.value,
            page=page,
            limit=limit,
        ):
            total = await self.community_repository.count(
                search=search, category=category, country=country, city=city
            )
            communities = await self.community_repository.find_all(
                search=search,
                category=category,
                country=country,
                city=city,
                sort_by=sort_by,
                sort_order=sort_order,
                limit=limit,
                offset=(page - 1) * limit,
            )
            logfire.info("Communities listed", count=len(communities), total=total)
            return communities, total

    async def list_communities_for_user(self, user_id: UserId) -> list[Community]:
        """Communities the user belongs to, newest first."""
        with logfire.span(
            "community_service.list_communities_for_user", user_id=str(user_id)
        ):
            return await self.community_repository.find_by_member(user_id)

    async def update_community(
        self, community_id: CommunityId, actor_id: UserId, changes: dict[str, Any]
    ) -> Community:
        """Merge a partial set of field changes (admins only).

        Raises:
            ForbiddenError: If the actor is not an admin
            ValidationError: If a field is unknown or out of bounds
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        def change(community: Community, now: datetime) -> Community:
            policy.authorize(community, actor_id, CommunityAction.UPDATE)
            max_members = changes.get("max_members")
            if max_members is not None and max_members < community.member_count:
                raise ValidationError(
                    "max_members cannot be lower than the current member count"
                )
            return community.revise(**changes)

        with logfire.span(
            "community_service.update_community",
            community_id=str(community_id),
            actor_id=str(actor_id),
            fields=sorted(changes),
        ):
            updated = await self._mutate(community_id, change)
            logfire.info("Community updated", community_id=str(community_id))
            return updated

    async def delete_community(self, community_id: CommunityId, actor_id: UserId) -> None:
        """Soft-delete a community (creator only).

        Pending invitations of the community are cancelled in the same unit
        of work; they stay stored for history.

        Raises:
            ForbiddenError: If the actor is not the creator
        """

        def change(community: Community, now: datetime) -> Community:
            policy.authorize(community, actor_id, CommunityAction.DELETE)
            return community.revise(deleted_at=now)

        with logfire.span(
            "community_service.delete_community",
            community_id=str(community_id),
            actor_id=str(actor_id),
        ):
            async with self.unit_of_work.transaction():
                deleted = await self._mutate(community_id, change)
                cancelled = await self.invitation_repository.cancel_pending_for_community(
                    community_id, deleted.deleted_at or self.clock.now()
                )
            logfire.info(
                "Community deleted",
                community_id=str(community_id),
                cancelled_invitations=cancelled,
            )

    async def join_community(self, community_id: CommunityId, user_id: UserId) -> Community:
        """Self-service join as a plain member.

        Raises:
            ConflictError: If already a member or the community is full
        """

        def change(community: Community, now: datetime) -> Community:
            if community.is_member(user_id):
                raise ConflictError("User is already a member of this community")
            policy.authorize(community, user_id, CommunityAction.JOIN)
            return community.with_member(user_id, CommunityRole.MEMBER, now)

        with logfire.span(
            "community_service.join_community",
            community_id=str(community_id),
            user_id=str(user_id),
        ):
            updated = await self._mutate(community_id, change)
            logfire.info(
                "Member joined",
                community_id=str(community_id),
                user_id=str(user_id),
                member_count=updated.member_count,
            )
            return updated

    async def leave_community(self, community_id: CommunityId, user_id: UserId) -> Community:
        """Leave a community.

        Raises:
            ForbiddenError: If the user is the creator or not a member
        """

        def change(community: Community, now: datetime) -> Community:
            if community.is_creator(user_id):
                raise ForbiddenError("Community creator cannot leave the community")
            if not community.is_member(user_id):
                raise ForbiddenError("User is not a member of this community")
            policy.authorize(community, user_id, CommunityAction.LEAVE)
            return community.without_member(user_id)

        with logfire.span(
            "community_service.leave_community",
            community_id=str(community_id),
            user_id=str(user_id),
        ):
            updated = await self._mutate(community_id, change)
            logfire.info(
                "Member left", community_id=str(community_id), user_id=str(user_id)
            )
            return updated

    async def add_member(
        self,
        community_id: CommunityId,
        user_id: UserId,
        role: CommunityRole = CommunityRole.MEMBER,
    ) -> Community:
        """Append a member on behalf of another flow (invitation acceptance).

        The member limit applies here exactly as it does to self-service joins.

        Raises:
            ConflictError: If already a member or the community is full
        """

        def change(community: Community, now: datetime) -> Community:
            return community.with_member(user_id, role, now)

        with logfire.span(
            "community_service.add_member",
            community_id=str(community_id),
            user_id=str(user_id),
            role=role.value,
        ):
            updated = await self._mutate(community_id, change)
            logfire.info(
                "Member added",
                community_id=str(community_id),
                user_id=str(user_id),
                role=role.value,
            )
            return updated

    async def change_member_role(
        self,
        community_id: CommunityId,
        actor_id: UserId,
        target_id: UserId,
        role: CommunityRole,
    ) -> Community:
        """Change a member's role (admins only, never the creator).

        Raises:
            ForbiddenError: If the actor is not an admin or targets the creator
            NotFoundError: If the target is not a member
        """

        def change(community: Community, now: datetime) -> Community:
            policy.authorize_role_change(community, actor_id, target_id)
            if not community.is_member(target_id):
                raise NotFoundError("Member", str(target_id))
            return community.with_role(target_id, role)

        with logfire.span(
            "community_service.change_member_role",
            community_id=str(community_id),
            actor_id=str(actor_id),
            target_id=str(target_id),
            role=role.value,
        ):
            updated = await self._mutate(community_id, change)
            logfire.info(
                "Member role changed",
                community_id=str(community_id),
                target_id=str(target_id),
                role=role.value,
            )
            return updated

    async def _mutate(self, community_id: CommunityId, change: Change) -> Community:
        """Apply ``change`` to the latest snapshot and compare-and-swap it in.

        Raises:
            ConflictError: If every attempt lost a race with another writer
        """
        for attempt in range(1, self.max_write_attempts + 1):
            current = await self.get_community(community_id)
            now = self.clock.now()
            updated = change(current, now).revise(
                version=current.version + 1, updated_at=now
            )
            if await self.community_repository.compare_and_swap(
                updated, expected_version=current.version
            ):
                return updated
            logfire.warn(
                "Community write conflict",
                community_id=str(community_id),
                attempt=attempt,
            )

        raise ConflictError("Community was modified concurrently, please retry")
