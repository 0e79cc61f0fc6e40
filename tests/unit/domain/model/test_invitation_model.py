"""Unit tests for the Invitation entity."""

from datetime import timedelta
from uuid import uuid4

import pytest

from trove.domain.error import ConflictError, ValidationError
from trove.domain.value import CommunityId, InvitationStatus, UserId
from tests.conftest import NOW, make_invitation


def _pending():
    return make_invitation(CommunityId(uuid4()), UserId(uuid4()))


class TestLazyExpiry:
    """Effective status is derived from the deadline."""

    def test_pending_before_deadline(self):
        invitation = _pending()

        assert invitation.effective_status(
            invitation.expires_at - timedelta(seconds=1)
        ) is InvitationStatus.PENDING

    def test_deadline_itself_counts_as_expired(self):
        invitation = _pending()

        assert invitation.is_expired(invitation.expires_at)
        assert invitation.effective_status(invitation.expires_at) is InvitationStatus.EXPIRED

    def test_terminal_status_is_not_overridden(self):
        invitation = _pending().accept(UserId(uuid4()), NOW)

        later = invitation.expires_at + timedelta(days=30)
        assert invitation.effective_status(later) is InvitationStatus.ACCEPTED

    def test_as_of_returns_expired_copy(self):
        invitation = _pending()

        stale = invitation.as_of(invitation.expires_at)

        assert stale.status is InvitationStatus.EXPIRED
        assert invitation.status is InvitationStatus.PENDING
        assert invitation.as_of(NOW) is invitation


class TestTransitions:
    """Pending moves to exactly one terminal state."""

    def test_accept_records_user_and_time(self):
        user_id = UserId(uuid4())

        accepted = _pending().accept(user_id, NOW)

        assert accepted.status is InvitationStatus.ACCEPTED
        assert accepted.accepted_at == NOW
        assert accepted.invitee_user_id == user_id

    def test_decline_and_cancel_stamp_times(self):
        assert _pending().decline(NOW).declined_at == NOW
        assert _pending().cancel(NOW).cancelled_at == NOW

    @pytest.mark.parametrize(
        "settle,message",
        [
            (lambda i: i.accept(UserId(uuid4()), NOW), "already been accepted"),
            (lambda i: i.decline(NOW), "already been declined"),
            (lambda i: i.cancel(NOW), "has been cancelled"),
            (lambda i: i.expire(), "has expired"),
        ],
    )
    def test_terminal_states_are_final(self, settle, message):
        settled = settle(_pending())

        with pytest.raises(ConflictError, match=message):
            settled.decline(NOW)
        with pytest.raises(ConflictError, match=message):
            settled.accept(UserId(uuid4()), NOW)

    def test_message_length_is_bounded(self):
        with pytest.raises(ValidationError, match="message"):
            _pending().revise(message="x" * 501)
