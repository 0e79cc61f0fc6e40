"""Unit tests for the community role policy."""

from uuid import uuid4

import pytest

from trove.domain import policy
from trove.domain.error import ForbiddenError
from trove.domain.policy import CommunityAction
from trove.domain.value import CommunityRole, UserId
from tests.conftest import make_community, make_invitation, make_user

CREATOR = UserId(uuid4())
ADMIN = UserId(uuid4())
MODERATOR = UserId(uuid4())
MEMBER = UserId(uuid4())
OUTSIDER = UserId(uuid4())

COMMUNITY = make_community(
    CREATOR,
    members={
        ADMIN: CommunityRole.ADMIN,
        MODERATOR: CommunityRole.MODERATOR,
        MEMBER: CommunityRole.MEMBER,
    },
)


class TestIsAllowed:
    """Decision table for every role and action."""

    @pytest.mark.parametrize(
        "user_id,action,expected",
        [
            (CREATOR, CommunityAction.UPDATE, True),
            (ADMIN, CommunityAction.UPDATE, True),
            (MODERATOR, CommunityAction.UPDATE, False),
            (MEMBER, CommunityAction.UPDATE, False),
            (OUTSIDER, CommunityAction.UPDATE, False),
            (CREATOR, CommunityAction.DELETE, True),
            (ADMIN, CommunityAction.DELETE, False),
            (OUTSIDER, CommunityAction.JOIN, True),
            (MEMBER, CommunityAction.JOIN, False),
            (MEMBER, CommunityAction.LEAVE, True),
            (ADMIN, CommunityAction.LEAVE, True),
            (CREATOR, CommunityAction.LEAVE, False),
            (OUTSIDER, CommunityAction.LEAVE, False),
            (ADMIN, CommunityAction.INVITE, True),
            (MODERATOR, CommunityAction.INVITE, True),
            (MEMBER, CommunityAction.INVITE, False),
            (OUTSIDER, CommunityAction.INVITE, False),
            (MODERATOR, CommunityAction.VIEW_INVITATIONS, True),
            (MEMBER, CommunityAction.VIEW_INVITATIONS, False),
            (ADMIN, CommunityAction.CHANGE_ROLE, True),
            (MODERATOR, CommunityAction.CHANGE_ROLE, False),
        ],
    )
    def test_decision(self, user_id, action, expected):
        assert policy.is_allowed(COMMUNITY, user_id, action) is expected


class TestAuthorize:
    """Tests for the raising variants."""

    def test_authorize_passes_when_allowed(self):
        policy.authorize(COMMUNITY, MODERATOR, CommunityAction.INVITE)

    def test_authorize_raises_with_action_message(self):
        with pytest.raises(ForbiddenError, match="Only admins and moderators"):
            policy.authorize(COMMUNITY, MEMBER, CommunityAction.INVITE)

    def test_role_change_of_creator_is_forbidden_even_for_admins(self):
        with pytest.raises(ForbiddenError, match="creator's role"):
            policy.authorize_role_change(COMMUNITY, ADMIN, CREATOR)

    def test_role_change_by_moderator_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            policy.authorize_role_change(COMMUNITY, MODERATOR, MEMBER)

    def test_only_inviter_may_cancel(self):
        invitation = make_invitation(COMMUNITY.id, ADMIN)

        policy.authorize_cancel(invitation, ADMIN)
        with pytest.raises(ForbiddenError):
            policy.authorize_cancel(invitation, CREATOR)

    def test_accept_requires_matching_email(self):
        invitation = make_invitation(COMMUNITY.id, ADMIN, email="bob@example.com")

        policy.authorize_accept(invitation, make_user("bob"))
        with pytest.raises(ForbiddenError, match="Email does not match"):
            policy.authorize_accept(invitation, make_user("eve"))
