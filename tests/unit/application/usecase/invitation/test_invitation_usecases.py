"""Unit tests for invitation use cases."""

import pytest

from trove.adapter.email.dispatcher import RecordingInvitationDispatcher
from trove.application.usecase.community import (
    CreateCommunityRequest,
    CreateCommunityUseCase,
)
from trove.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
    GetInvitationRequest,
    GetInvitationUseCase,
    ListCommunityInvitationsRequest,
    ListCommunityInvitationsUseCase,
    ListMyInvitationsRequest,
    ListMyInvitationsUseCase,
)
from trove.domain.error import ValidationError
from trove.domain.repository import UserRepository
from trove.domain.service import FrozenClock, InvitationService
from trove.domain.value import CommunityCategory, InvitationStatus
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _setup(env):
    users = await env.get(UserRepository)
    alice = await users.save(make_user("alice"))
    bob = await users.save(make_user("bob"))
    create = await env.get(CreateCommunityUseCase)
    community = await create.execute(
        CreateCommunityRequest(
            creator_id=str(alice.id),
            name="Alpine Club",
            category=CommunityCategory.ADVENTURE,
        )
    )
    invite = await env.get(CreateInvitationUseCase)
    created = await invite.execute(
        CreateInvitationRequest(
            community_id=community.community_id,
            inviter_id=str(alice.id),
            email="bob@example.com",
            message="See you on the trail",
        )
    )
    recorder = await env.get(RecordingInvitationDispatcher)
    return alice, bob, community, created, recorder.last_token()


class TestCreateInvitationUseCase:
    @pytest.mark.asyncio
    async def test_response_never_carries_the_token(self, unit_env):
        # Arrange & Act
        _, _, _, created, token = await _setup(unit_env)

        # Assert
        dumped = created.model_dump_json()
        assert token not in dumped
        assert "token" not in created.invitation.model_dump()
        assert created.invitation.status is InvitationStatus.PENDING
        assert created.invitation.community.name == "Alpine Club"
        assert created.invitation.inviter.username == "alice"


class TestTokenUseCases:
    """Tests for get, accept and cancel."""

    @pytest.mark.asyncio
    async def test_get_by_token_shows_community_and_inviter(self, unit_env):
        _, _, community, created, token = await _setup(unit_env)
        use_case = await unit_env.get(GetInvitationUseCase)

        response = await use_case.execute(GetInvitationRequest(token=token))

        assert response.invitation.invitation_id == created.invitation.invitation_id
        assert response.invitation.community.community_id == community.community_id
        assert response.invitation.message == "See you on the trail"

    @pytest.mark.asyncio
    async def test_empty_token_rejected(self, unit_env):
        use_case = await unit_env.get(GetInvitationUseCase)

        with pytest.raises(ValidationError, match="Invalid invitation token"):
            await use_case.execute(GetInvitationRequest(token=""))

    @pytest.mark.asyncio
    async def test_accept_returns_resolved_roster(self, unit_env):
        _, bob, _, _, token = await _setup(unit_env)
        use_case = await unit_env.get(AcceptInvitationUseCase)

        response = await use_case.execute(
            AcceptInvitationRequest(token=token, user_id=str(bob.id))
        )

        assert response.invitation.status is InvitationStatus.ACCEPTED
        assert response.community.member_count == 2
        assert {m.user.username for m in response.community.members} == {
            "alice",
            "bob",
        }

    @pytest.mark.asyncio
    async def test_cancel(self, unit_env):
        alice, _, _, created, _ = await _setup(unit_env)
        use_case = await unit_env.get(CancelInvitationUseCase)

        response = await use_case.execute(
            CancelInvitationRequest(
                invitation_id=created.invitation.invitation_id, user_id=str(alice.id)
            )
        )

        assert response.invitation.status is InvitationStatus.CANCELLED


class TestListAndSweep:
    @pytest.mark.asyncio
    async def test_inbox_and_staff_listing(self, unit_env):
        alice, bob, community, created, _ = await _setup(unit_env)
        inbox = await unit_env.get(ListMyInvitationsUseCase)
        staff = await unit_env.get(ListCommunityInvitationsUseCase)

        mine = await inbox.execute(ListMyInvitationsRequest(user_id=str(bob.id)))
        listed = await staff.execute(
            ListCommunityInvitationsRequest(
                community_id=community.community_id, user_id=str(alice.id)
            )
        )

        assert [i.invitation_id for i in mine.invitations] == [
            created.invitation.invitation_id
        ]
        assert listed.total == 1

    @pytest.mark.asyncio
    async def test_sweep_reports_count(self, unit_env):
        await _setup(unit_env)
        clock = await unit_env.get(FrozenClock)
        use_case = await unit_env.get(ExpireInvitationsUseCase)

        before = await use_case.execute(ExpireInvitationsRequest())
        clock.advance((await unit_env.get(InvitationService)).ttl)
        after = await use_case.execute(ExpireInvitationsRequest())

        assert before.expired == 0
        assert after.expired == 1
