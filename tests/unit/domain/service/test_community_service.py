"""Unit tests for CommunityService."""

from typing import Callable
from uuid import uuid4

import pytest

from trove.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from trove.domain.model import Community
from trove.domain.repository import InvitationRepository, UserRepository
from trove.domain.service import CommunityService, FrozenClock
from trove.domain.value import CommunityCategory, CommunityRole, InvitationStatus, UserId
from trove.persistence.repository.inmemory import (
    InMemoryCommunityRepository,
    InMemoryInvitationRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
)
from tests.conftest import make_invitation, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _found(service: CommunityService, creator_id: UserId, **kwargs) -> Community:
    return await service.create_community(
        creator_id=creator_id,
        name=kwargs.pop("name", "Alpine Club"),
        description="Weekend hikes",
        category=CommunityCategory.ADVENTURE,
        **kwargs,
    )


class RacingCommunityRepository(InMemoryCommunityRepository):
    """Lets a rival writer land just before each of the next ``races`` writes."""

    def __init__(
        self,
        store: InMemoryStore,
        rival: Callable[[Community], Community] = lambda c: c,
        races: int = 1,
    ) -> None:
        super().__init__(store)
        self.rival = rival
        self.races = races

    async def compare_and_swap(self, community: Community, expected_version: int) -> bool:
        if self.races > 0:
            self.races -= 1
            current = self.store.communities[community.id]
            self.store.communities[community.id] = self.rival(current).revise(
                version=current.version + 1
            )
        return await super().compare_and_swap(community, expected_version)


def _racing_service(store: InMemoryStore, repo: InMemoryCommunityRepository):
    return CommunityService(
        community_repository=repo,
        invitation_repository=InMemoryInvitationRepository(store),
        unit_of_work=InMemoryUnitOfWork(store),
        clock=FrozenClock(),
        max_write_attempts=3,
    )


class TestCreateCommunity:
    """Tests for create_community."""

    @pytest.mark.asyncio
    async def test_creator_becomes_admin(self, unit_env):
        # Arrange
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())

        # Act
        community = await _found(service, creator, tags=["ski", "hike"])

        # Assert
        assert community.members[0].user_id == creator
        assert community.members[0].role is CommunityRole.ADMIN
        assert community.version == 1
        assert community.tags == ("ski", "hike")
        assert (await service.get_community(community.id)) == community

    @pytest.mark.asyncio
    async def test_invalid_fields_raise_validation_error(self, unit_env):
        service = await unit_env.get(CommunityService)

        with pytest.raises(ValidationError, match="max_members"):
            await _found(service, UserId(uuid4()), max_members=5000)

    @pytest.mark.asyncio
    async def test_get_unknown_community_raises(self, unit_env):
        service = await unit_env.get(CommunityService)

        with pytest.raises(NotFoundError, match="Community not found"):
            await service.get_community(uuid4())


class TestMembership:
    """Tests for join, leave and role changes."""

    @pytest.mark.asyncio
    async def test_join_appends_member_and_bumps_version(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()))
        joiner = UserId(uuid4())

        updated = await service.join_community(community.id, joiner)

        assert updated.role_of(joiner) is CommunityRole.MEMBER
        assert updated.member_count == 2
        assert updated.version == 2

    @pytest.mark.asyncio
    async def test_join_twice_conflicts(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()))
        joiner = UserId(uuid4())
        await service.join_community(community.id, joiner)

        with pytest.raises(ConflictError, match="already a member"):
            await service.join_community(community.id, joiner)

    @pytest.mark.asyncio
    async def test_join_full_community_conflicts(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()), max_members=2)
        await service.join_community(community.id, UserId(uuid4()))

        with pytest.raises(ConflictError, match="member limit"):
            await service.join_community(community.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_creator_cannot_leave(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        community = await _found(service, creator)

        with pytest.raises(ForbiddenError, match="creator cannot leave"):
            await service.leave_community(community.id, creator)

    @pytest.mark.asyncio
    async def test_non_member_cannot_leave(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()))

        with pytest.raises(ForbiddenError, match="not a member"):
            await service.leave_community(community.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_member_leaves(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()))
        member = UserId(uuid4())
        await service.join_community(community.id, member)

        updated = await service.leave_community(community.id, member)

        assert not updated.is_member(member)
        assert updated.member_count == 1

    @pytest.mark.asyncio
    async def test_admin_promotes_member(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator, member = UserId(uuid4()), UserId(uuid4())
        community = await _found(service, creator)
        await service.join_community(community.id, member)

        updated = await service.change_member_role(
            community.id, creator, member, CommunityRole.MODERATOR
        )

        assert updated.role_of(member) is CommunityRole.MODERATOR

    @pytest.mark.asyncio
    async def test_role_change_of_non_member_is_not_found(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        community = await _found(service, creator)

        with pytest.raises(NotFoundError, match="Member not found"):
            await service.change_member_role(
                community.id, creator, UserId(uuid4()), CommunityRole.MODERATOR
            )

    @pytest.mark.asyncio
    async def test_member_cannot_change_roles(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator, member = UserId(uuid4()), UserId(uuid4())
        community = await _found(service, creator)
        await service.join_community(community.id, member)

        with pytest.raises(ForbiddenError):
            await service.change_member_role(
                community.id, member, member, CommunityRole.ADMIN
            )


class TestUpdateAndDelete:
    """Tests for update_community and delete_community."""

    @pytest.mark.asyncio
    async def test_admin_updates_only_given_fields(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        community = await _found(service, creator)

        updated = await service.update_community(
            community.id, creator, {"name": "Alpine Club Zurich", "is_public": False}
        )

        assert updated.name == "Alpine Club Zurich"
        assert updated.is_public is False
        assert updated.description == community.description
        assert updated.version == 2

    @pytest.mark.asyncio
    async def test_member_cannot_update(self, unit_env):
        service = await unit_env.get(CommunityService)
        community = await _found(service, UserId(uuid4()))
        member = UserId(uuid4())
        await service.join_community(community.id, member)

        with pytest.raises(ForbiddenError, match="Only admins"):
            await service.update_community(community.id, member, {"name": "Hijacked"})

    @pytest.mark.asyncio
    async def test_max_members_below_member_count_rejected(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        community = await _found(service, creator)
        for _ in range(2):
            await service.join_community(community.id, UserId(uuid4()))

        with pytest.raises(ValidationError, match="current member count"):
            await service.update_community(community.id, creator, {"max_members": 2})

    @pytest.mark.asyncio
    async def test_unknown_fields_rejected(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        community = await _found(service, creator)

        with pytest.raises(ValidationError, match="creator_id"):
            await service.update_community(
                community.id, creator, {"creator_id": UserId(uuid4())}
            )

    @pytest.mark.asyncio
    async def test_delete_hides_community_and_cancels_pending(self, unit_env):
        """Deleting cancels pending invitations but keeps settled ones as they are."""
        # Arrange
        service = await unit_env.get(CommunityService)
        invitation_repo = await unit_env.get(InvitationRepository)
        creator = UserId(uuid4())
        community = await _found(service, creator)
        pending = await invitation_repo.save(make_invitation(community.id, creator))
        declined = await invitation_repo.save(
            make_invitation(
                community.id,
                creator,
                email="carol@example.com",
                status=InvitationStatus.DECLINED,
            )
        )

        # Act
        await service.delete_community(community.id, creator)

        # Assert
        with pytest.raises(NotFoundError):
            await service.get_community(community.id)
        assert (await invitation_repo.find_by_id(pending.id)).status is (
            InvitationStatus.CANCELLED
        )
        assert (await invitation_repo.find_by_id(declined.id)).status is (
            InvitationStatus.DECLINED
        )

    @pytest.mark.asyncio
    async def test_only_creator_deletes(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator, admin = UserId(uuid4()), UserId(uuid4())
        community = await _found(service, creator)
        await service.join_community(community.id, admin)
        await service.change_member_role(community.id, creator, admin, CommunityRole.ADMIN)

        with pytest.raises(ForbiddenError, match="Only the creator"):
            await service.delete_community(community.id, admin)


class TestListing:
    """Tests for list_communities and list_communities_for_user."""

    @pytest.mark.asyncio
    async def test_list_filters_and_paginates(self, unit_env):
        service = await unit_env.get(CommunityService)
        creator = UserId(uuid4())
        for name in ("Alpine Club", "Alpine Skiers", "Street Food Lovers"):
            await _found(service, creator, name=name)

        page, total = await service.list_communities(search="alpine", page=1, limit=1)

        assert total == 2
        assert len(page) == 1
        assert "Alpine" in page[0].name

    @pytest.mark.asyncio
    async def test_list_for_user_only_returns_memberships(self, unit_env):
        service = await unit_env.get(CommunityService)
        users = await unit_env.get(UserRepository)
        bob = await users.save(make_user("bob"))
        joined = await _found(service, UserId(uuid4()), name="Joined")
        await _found(service, UserId(uuid4()), name="Not joined")
        await service.join_community(joined.id, bob.id)

        communities = await service.list_communities_for_user(bob.id)

        assert [c.id for c in communities] == [joined.id]


class TestOptimisticConcurrency:
    """Writes are compare-and-swap on version; lost races retry from a fresh read."""

    @pytest.mark.asyncio
    async def test_lost_race_is_retried(self):
        # Arrange
        store = InMemoryStore()
        repo = RacingCommunityRepository(store, races=1)
        service = _racing_service(store, repo)
        community = await _found(service, UserId(uuid4()))
        joiner = UserId(uuid4())

        # Act
        updated = await service.join_community(community.id, joiner)

        # Assert - rival bumped to 2, our retry landed as 3
        assert updated.version == 3
        assert updated.is_member(joiner)
        assert store.communities[community.id] == updated

    @pytest.mark.asyncio
    async def test_rival_write_is_not_lost(self):
        """The retry starts from the rival's roster, so both joins survive."""
        store = InMemoryStore()
        rival_member = UserId(uuid4())
        repo = RacingCommunityRepository(
            store,
            rival=lambda c: c.with_member(rival_member, CommunityRole.MEMBER, c.updated_at),
        )
        service = _racing_service(store, repo)
        community = await _found(service, UserId(uuid4()))
        joiner = UserId(uuid4())

        updated = await service.join_community(community.id, joiner)

        assert updated.is_member(rival_member)
        assert updated.is_member(joiner)
        assert updated.member_count == 3

    @pytest.mark.asyncio
    async def test_retry_rechecks_policy(self):
        """An admin demoted by a concurrent write loses the right to update."""
        store = InMemoryStore()
        creator, admin = UserId(uuid4()), UserId(uuid4())
        repo = RacingCommunityRepository(store, races=0)
        service = _racing_service(store, repo)
        community = await _found(service, creator)
        await service.join_community(community.id, admin)
        await service.change_member_role(community.id, creator, admin, CommunityRole.ADMIN)
        repo.rival = lambda c: c.with_role(admin, CommunityRole.MEMBER)
        repo.races = 1

        with pytest.raises(ForbiddenError):
            await service.update_community(community.id, admin, {"name": "Renamed"})

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        store = InMemoryStore()
        repo = RacingCommunityRepository(store, races=0)
        service = _racing_service(store, repo)
        community = await _found(service, UserId(uuid4()))
        repo.races = 3

        with pytest.raises(ConflictError, match="modified concurrently"):
            await service.join_community(community.id, UserId(uuid4()))

        assert store.communities[community.id].member_count == 1
