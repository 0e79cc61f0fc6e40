"""Invitation entity.

An invitation grants one email address a time-limited right to join one
community. Only the SHA-256 digest of its bearer token is stored.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from trove.domain.error import ConflictError
from trove.domain.model.common import DomainModel
from trove.domain.value import (
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - One pending invitation per community/email combination
    - Status only moves from pending to one terminal state
    - A pending invitation is expired once ``now >= expires_at``,
      whatever its stored status says
    - Terminal invitations are kept for history, never deleted
    """

    id: InvitationId
    community_id: CommunityId
    inviter_id: UserId
    invitee_email: EmailAddress
    invitee_user_id: Optional[UserId] = None  # Filled once the email maps to a user
    token_digest: str = Field(min_length=64, max_length=64)
    message: str = Field(default="", max_length=500)
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime
    accepted_at: Optional[datetime] = None
    declined_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the deadline has passed (the boundary counts as expired)."""
        return now >= self.expires_at

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status with lazy expiry applied."""
        if self.status is InvitationStatus.PENDING and self.is_expired(now):
            return InvitationStatus.EXPIRED
        return self.status

    def as_of(self, now: datetime) -> "Invitation":
        """Copy whose ``status`` reflects lazy expiry (for read models)."""
        status = self.effective_status(now)
        if status is self.status:
            return self
        return self.model_copy(update={"status": status})

    def ensure_pending(self) -> None:
        """Raise if the invitation already reached a terminal state.

        Raises:
            ConflictError: With a message naming the terminal state
        """
        match self.status:
            case InvitationStatus.PENDING:
                return
            case InvitationStatus.ACCEPTED:
                raise ConflictError("Invitation has already been accepted")
            case InvitationStatus.DECLINED:
                raise ConflictError("Invitation has already been declined")
            case InvitationStatus.CANCELLED:
                raise ConflictError("Invitation has been cancelled")
            case InvitationStatus.EXPIRED:
                raise ConflictError("Invitation has expired")

    def accept(self, user_id: UserId, now: datetime) -> "Invitation":
        self.ensure_pending()
        return self.revise(
            status=InvitationStatus.ACCEPTED,
            accepted_at=now,
            invitee_user_id=user_id,
        )

    def decline(self, now: datetime) -> "Invitation":
        self.ensure_pending()
        return self.revise(status=InvitationStatus.DECLINED, declined_at=now)

    def cancel(self, now: datetime) -> "Invitation":
        self.ensure_pending()
        return self.revise(status=InvitationStatus.CANCELLED, cancelled_at=now)

    def expire(self) -> "Invitation":
        self.ensure_pending()
        return self.revise(status=InvitationStatus.EXPIRED)
