"""Integration tests for the PostgreSQL repositories.

These tests need a database with migrations applied; they are skipped
unless ``DATABASE__URL`` is set.
"""

import os
from datetime import timedelta
from uuid import uuid4

import pytest

from trove.domain.repository import (
    CommunityRepository,
    InvitationRepository,
    UserRepository,
)
from trove.domain.value import CommunityRole, InvitationStatus
from tests.conftest import NOW, make_community, make_invitation, make_user
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ, reason="PostgreSQL not configured"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


async def seed(env, *usernames):
    """Insert users with unique names; returns them in order."""
    users = await env.get(UserRepository)
    suffix = uuid4().hex[:8]
    return [await users.save(make_user(f"{name}-{suffix}")) for name in usernames]


class TestCommunityRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_roster_round_trips(self, integration_env):
        # Arrange
        repo = await integration_env.get(CommunityRepository)
        alice, bob = await seed(integration_env, "alice", "bob")
        community = make_community(alice.id, members={bob.id: CommunityRole.MODERATOR})

        # Act
        await repo.save(community)
        found = await repo.find_by_id(community.id)

        # Assert
        assert found is not None
        assert found.member_count == 2
        assert found.role_of(bob.id) is CommunityRole.MODERATOR
        assert community.id in [c.id for c in await repo.find_by_member(bob.id)]

    @pytest.mark.asyncio
    async def test_compare_and_swap_checks_version(self, integration_env):
        repo = await integration_env.get(CommunityRepository)
        (alice,) = await seed(integration_env, "alice")
        community = await repo.save(make_community(alice.id))
        renamed = community.revise(version=2, name="Renamed")

        assert await repo.compare_and_swap(renamed, expected_version=1) is True
        assert await repo.compare_and_swap(renamed, expected_version=1) is False
        assert (await repo.find_by_id(community.id)).name == "Renamed"


class TestInvitationRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_find_by_token_digest(self, integration_env):
        # Arrange
        communities = await integration_env.get(CommunityRepository)
        invitations = await integration_env.get(InvitationRepository)
        (alice,) = await seed(integration_env, "alice")
        community = await communities.save(make_community(alice.id))
        invitation = make_invitation(community.id, alice.id)

        # Act
        await invitations.save(invitation)
        found = await invitations.find_by_token_digest(invitation.token_digest)

        # Assert
        assert found is not None
        assert found.id == invitation.id
        assert found.invitee_email.root == "bob@example.com"
        assert await invitations.find_by_token_digest("0" * 64) is None

    @pytest.mark.asyncio
    async def test_transition_is_conditional(self, integration_env):
        communities = await integration_env.get(CommunityRepository)
        invitations = await integration_env.get(InvitationRepository)
        (alice,) = await seed(integration_env, "alice")
        community = await communities.save(make_community(alice.id))
        invitation = await invitations.save(make_invitation(community.id, alice.id))

        first = await invitations.transition(
            invitation.decline(NOW), from_status=InvitationStatus.PENDING
        )
        second = await invitations.transition(
            invitation.cancel(NOW), from_status=InvitationStatus.PENDING
        )

        assert first is True
        assert second is False
        stored = await invitations.find_by_id(invitation.id)
        assert stored.status is InvitationStatus.DECLINED
        assert stored.declined_at is not None

    @pytest.mark.asyncio
    async def test_pending_filter_excludes_stale(self, integration_env):
        # Arrange
        communities = await integration_env.get(CommunityRepository)
        invitations = await integration_env.get(InvitationRepository)
        (alice,) = await seed(integration_env, "alice")
        community = await communities.save(make_community(alice.id))
        live = await invitations.save(
            make_invitation(community.id, alice.id, email="live@example.com")
        )
        await invitations.save(
            make_invitation(
                community.id, alice.id, email="stale@example.com", ttl=timedelta(hours=1)
            )
        )
        as_of = NOW + timedelta(hours=2)

        # Act
        pending = await invitations.find_by_community(
            community.id, as_of=as_of, status=InvitationStatus.PENDING
        )
        expired = await invitations.count_by_community(
            community.id, as_of=as_of, status=InvitationStatus.EXPIRED
        )
        stale = await invitations.find_stale_pending(as_of=as_of, limit=500)

        # Assert
        assert [i.id for i in pending] == [live.id]
        assert expired == 1
        assert "stale@example.com" in [i.invitee_email.root for i in stale]
