"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from trove.domain.model.invitation import Invitation
from trove.domain.repository.invitation import InvitationRepository
from trove.domain.value import (
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)

from .store import InMemoryStore


def _newest_first(invitations: list[Invitation]) -> list[Invitation]:
    return sorted(invitations, key=lambda i: i.created_at, reverse=True)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Mirrors the storage constraints of the PostgreSQL schema: one
    stored-pending invitation per community/email and unique token digests.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()

    def _for_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus],
    ) -> list[Invitation]:
        invitations = [
            i for i in self.store.invitations.values() if i.community_id == community_id
        ]
        if status:
            invitations = [i for i in invitations if i.effective_status(as_of) is status]
        return invitations

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self.store.invitations.get(invitation_id)

    async def find_by_token_digest(self, token_digest: str) -> Optional[Invitation]:
        """Find an invitation by token digest."""
        for invitation in self.store.invitations.values():
            if invitation.token_digest == token_digest:
                return invitation
        return None

    def _stored_pending(
        self, community_id: CommunityId, email: EmailAddress
    ) -> Optional[Invitation]:
        for invitation in self.store.invitations.values():
            if (
                invitation.community_id == community_id
                and invitation.invitee_email == email
                and invitation.status is InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def find_pending_for_email(
        self, community_id: CommunityId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the stored-pending invitation for a community/email pair."""
        return self._stored_pending(community_id, email)

    async def find_by_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find a community's invitations, newest first."""
        invitations = _newest_first(self._for_community(community_id, as_of, status))
        return invitations[offset : offset + limit]

    async def count_by_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus] = None,
    ) -> int:
        """Count a community's invitations."""
        return len(self._for_community(community_id, as_of, status))

    async def find_live_for_email(
        self, email: EmailAddress, as_of: datetime
    ) -> list[Invitation]:
        """Find pending, unexpired invitations addressed to an email."""
        return _newest_first(
            [
                i
                for i in self.store.invitations.values()
                if i.invitee_email == email
                and i.effective_status(as_of) is InvitationStatus.PENDING
            ]
        )

    async def find_stale_pending(self, as_of: datetime, limit: int) -> list[Invitation]:
        """Find stored-pending invitations past their deadline."""
        stale = [
            i
            for i in self.store.invitations.values()
            if i.status is InvitationStatus.PENDING and i.is_expired(as_of)
        ]
        return sorted(stale, key=lambda i: i.expires_at)[:limit]

    async def save(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Raises:
            IntegrityError: If the ID or token digest is taken, or a pending
                invitation already exists for this community/email
        """
        if invitation.id in self.store.invitations:
            raise IntegrityError("Duplicate invitation id", None, Exception())
        if await self.find_by_token_digest(invitation.token_digest):
            raise IntegrityError("Duplicate token digest", None, Exception())
        if invitation.status is InvitationStatus.PENDING and self._stored_pending(
            invitation.community_id, invitation.invitee_email
        ):
            raise IntegrityError("Duplicate pending invitation", None, Exception())

        self.store.invitations[invitation.id] = invitation
        return invitation

    async def transition(
        self, invitation: Invitation, from_status: InvitationStatus
    ) -> bool:
        """Write the new state if the stored status is still ``from_status``."""
        current = self.store.invitations.get(invitation.id)
        if current is None or current.status is not from_status:
            return False
        self.store.invitations[invitation.id] = current.model_copy(
            update={
                "status": invitation.status,
                "invitee_user_id": invitation.invitee_user_id,
                "accepted_at": invitation.accepted_at,
                "declined_at": invitation.declined_at,
                "cancelled_at": invitation.cancelled_at,
            }
        )
        return True

    async def cancel_pending_for_community(
        self, community_id: CommunityId, cancelled_at: datetime
    ) -> int:
        """Cancel every stored-pending invitation of a community."""
        cancelled = 0
        for invitation in list(self.store.invitations.values()):
            if (
                invitation.community_id == community_id
                and invitation.status is InvitationStatus.PENDING
            ):
                self.store.invitations[invitation.id] = invitation.cancel(cancelled_at)
                cancelled += 1
        return cancelled

    async def assign_invitee(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        """Record the registered user behind the invitee email."""
        invitation = self.store.invitations.get(invitation_id)
        if invitation and invitation.invitee_user_id is None:
            self.store.invitations[invitation_id] = invitation.model_copy(
                update={"invitee_user_id": user_id}
            )
