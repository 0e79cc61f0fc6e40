"""Unit tests for the in-memory backend used by the test container."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from trove.domain.repository import CommunitySortField, SortOrder
from trove.domain.value import CommunityRole, EmailAddress, InvitationStatus, UserId
from trove.persistence.repository.inmemory import (
    InMemoryCommunityRepository,
    InMemoryInvitationRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
)
from tests.conftest import NOW, make_community, make_invitation


class TestInMemoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_error_restores_every_table(self):
        # Arrange
        store = InMemoryStore()
        communities = InMemoryCommunityRepository(store)
        invitations = InMemoryInvitationRepository(store)
        community = await communities.save(make_community(UserId(uuid4())))

        # Act
        with pytest.raises(RuntimeError):
            async with InMemoryUnitOfWork(store).transaction():
                await invitations.save(make_invitation(community.id, community.creator_id))
                await communities.compare_and_swap(
                    community.revise(version=2, name="Changed"), expected_version=1
                )
                raise RuntimeError("boom")

        # Assert
        assert store.invitations == {}
        assert (await communities.find_by_id(community.id)).name == community.name

    @pytest.mark.asyncio
    async def test_success_keeps_writes(self):
        store = InMemoryStore()
        invitations = InMemoryInvitationRepository(store)

        async with InMemoryUnitOfWork(store).transaction():
            saved = await invitations.save(make_invitation(uuid4(), UserId(uuid4())))

        assert await invitations.find_by_id(saved.id) == saved


class TestInMemoryCommunityRepository:
    @pytest.mark.asyncio
    async def test_compare_and_swap_requires_expected_version(self):
        repo = InMemoryCommunityRepository()
        community = await repo.save(make_community(UserId(uuid4())))
        newer = community.revise(version=2, name="Renamed")

        assert await repo.compare_and_swap(newer, expected_version=1) is True
        assert await repo.compare_and_swap(newer, expected_version=1) is False

    @pytest.mark.asyncio
    async def test_soft_deleted_communities_are_invisible(self):
        repo = InMemoryCommunityRepository()
        creator = UserId(uuid4())
        community = await repo.save(make_community(creator))
        await repo.compare_and_swap(
            community.revise(version=2, deleted_at=NOW), expected_version=1
        )

        assert await repo.find_by_id(community.id) is None
        assert await repo.find_by_member(creator) == []
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_sort_by_member_count(self):
        repo = InMemoryCommunityRepository()
        small = await repo.save(make_community(UserId(uuid4()), name="Small"))
        big = await repo.save(
            make_community(
                UserId(uuid4()),
                members={UserId(uuid4()): CommunityRole.MEMBER},
                name="Big",
            )
        )

        ordered = await repo.find_all(
            sort_by=CommunitySortField.MEMBER_COUNT, sort_order=SortOrder.DESC
        )

        assert [c.id for c in ordered] == [big.id, small.id]

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self):
        repo = InMemoryCommunityRepository()
        community = await repo.save(make_community(UserId(uuid4())))

        with pytest.raises(IntegrityError):
            await repo.save(community)


class TestInMemoryInvitationRepository:
    @pytest.mark.asyncio
    async def test_one_pending_invitation_per_email(self):
        repo = InMemoryInvitationRepository()
        community_id, inviter = uuid4(), UserId(uuid4())
        await repo.save(make_invitation(community_id, inviter))

        with pytest.raises(IntegrityError):
            await repo.save(make_invitation(community_id, inviter))

        # Another community, or a settled invitation, does not collide
        await repo.save(make_invitation(uuid4(), inviter))
        await repo.save(
            make_invitation(community_id, inviter, status=InvitationStatus.DECLINED)
        )

    @pytest.mark.asyncio
    async def test_transition_is_conditional_on_stored_status(self):
        repo = InMemoryInvitationRepository()
        invitation = await repo.save(make_invitation(uuid4(), UserId(uuid4())))

        assert await repo.transition(
            invitation.decline(NOW), from_status=InvitationStatus.PENDING
        )
        assert not await repo.transition(
            invitation.cancel(NOW), from_status=InvitationStatus.PENDING
        )
        assert (await repo.find_by_id(invitation.id)).status is InvitationStatus.DECLINED

    @pytest.mark.asyncio
    async def test_live_for_email_excludes_expired_and_settled(self):
        repo = InMemoryInvitationRepository()
        inviter = UserId(uuid4())
        live = await repo.save(make_invitation(uuid4(), inviter))
        await repo.save(make_invitation(uuid4(), inviter, ttl=timedelta(hours=1)))
        await repo.save(
            make_invitation(uuid4(), inviter, status=InvitationStatus.ACCEPTED)
        )

        found = await repo.find_live_for_email(
            EmailAddress("bob@example.com"), as_of=NOW + timedelta(hours=2)
        )

        assert [i.id for i in found] == [live.id]
