"""Unit tests for community use cases."""

import pytest

from trove.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityUseCase,
    GetCommunityRequest,
    GetCommunityUseCase,
    JoinCommunityUseCase,
    ListCommunitiesRequest,
    ListCommunitiesUseCase,
    ListMyCommunitiesRequest,
    ListMyCommunitiesUseCase,
    MembershipRequest,
    UpdateCommunityRequest,
    UpdateCommunityUseCase,
)
from trove.domain.error import NotFoundError, ValidationError
from trove.domain.repository import UserRepository
from trove.domain.value import CommunityCategory, CommunityRole
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _create(env, creator, name="Alpine Club"):
    use_case = await env.get(CreateCommunityUseCase)
    return await use_case.execute(
        CreateCommunityRequest(
            creator_id=str(creator.id),
            name=name,
            description="Weekend hikes",
            category=CommunityCategory.ADVENTURE,
            location={"country": "Switzerland", "city": "Zurich"},
            tags=["hiking"],
        )
    )


class TestCreateAndGet:
    """Tests for CreateCommunityUseCase and GetCommunityUseCase."""

    @pytest.mark.asyncio
    async def test_create_resolves_creator_profile(self, unit_env):
        # Arrange
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))

        # Act
        response = await _create(unit_env, alice)

        # Assert
        assert response.creator.username == "alice"
        assert response.member_count == 1
        assert response.members[0].role is CommunityRole.ADMIN
        assert response.members[0].user.username == "alice"
        assert response.location.city == "Zurich"

    @pytest.mark.asyncio
    async def test_get_community_by_id(self, unit_env):
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        created = await _create(unit_env, alice)
        use_case = await unit_env.get(GetCommunityUseCase)

        response = await use_case.execute(
            GetCommunityRequest(community_id=created.community_id)
        )

        assert response.community_id == created.community_id
        assert response.name == "Alpine Club"

    @pytest.mark.asyncio
    async def test_malformed_id_is_validation_error(self, unit_env):
        use_case = await unit_env.get(GetCommunityUseCase)

        with pytest.raises(ValidationError, match="Invalid community ID"):
            await use_case.execute(GetCommunityRequest(community_id="not-a-uuid"))

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, unit_env):
        use_case = await unit_env.get(GetCommunityUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetCommunityRequest(community_id="00000000-0000-0000-0000-000000000000")
            )


class TestListing:
    """Tests for ListCommunitiesUseCase and ListMyCommunitiesUseCase."""

    @pytest.mark.asyncio
    async def test_pagination_metadata(self, unit_env):
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        for name in ("Alpine Club", "Bouldering Crew", "City Walkers"):
            await _create(unit_env, alice, name=name)
        use_case = await unit_env.get(ListCommunitiesUseCase)

        response = await use_case.execute(ListCommunitiesRequest(page=1, limit=2))

        assert len(response.communities) == 2
        assert response.pagination.total == 3
        assert response.pagination.total_pages == 2
        assert response.pagination.has_next is True
        assert response.pagination.has_prev is False

    @pytest.mark.asyncio
    async def test_my_communities_include_role(self, unit_env):
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        bob = await users.save(make_user("bob"))
        created = await _create(unit_env, alice)
        join = await unit_env.get(JoinCommunityUseCase)
        await join.execute(
            MembershipRequest(community_id=created.community_id, user_id=str(bob.id))
        )
        use_case = await unit_env.get(ListMyCommunitiesUseCase)

        mine = await use_case.execute(ListMyCommunitiesRequest(user_id=str(bob.id)))

        assert [c.community_id for c in mine.communities] == [created.community_id]
        assert mine.communities[0].role is CommunityRole.MEMBER


class TestUpdate:
    @pytest.mark.asyncio
    async def test_only_set_fields_change(self, unit_env):
        """Fields left out of the request keep their values."""
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        created = await _create(unit_env, alice)
        use_case = await unit_env.get(UpdateCommunityUseCase)

        response = await use_case.execute(
            UpdateCommunityRequest(
                community_id=created.community_id,
                actor_id=str(alice.id),
                description="Hikes and via ferratas",
            )
        )

        assert response.description == "Hikes and via ferratas"
        assert response.name == created.name
        assert response.tags == ["hiking"]
        assert response.location == created.location
