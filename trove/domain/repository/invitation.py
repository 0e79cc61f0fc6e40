"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from trove.domain.model.invitation import Invitation
from trove.domain.value import (
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Status filters passed together with ``as_of`` are evaluated with lazy
    expiry: a stored ``pending`` row whose deadline has passed counts as
    ``expired``.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token_digest(self, token_digest: str) -> Optional[Invitation]:
        """Find an invitation by the SHA-256 digest of its token.

        Used when an invitee opens the emailed link.

        Args:
            token_digest: Hex digest of the bearer token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_for_email(
        self, community_id: CommunityId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the stored-pending invitation for a community/email pair.

        The record may already be past its deadline; callers settle that.
        """
        pass

    @abstractmethod
    async def find_by_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find a community's invitations, newest first.

        Args:
            community_id: The community
            as_of: Instant used for lazy expiry when filtering by status
            status: Optional effective-status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def count_by_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus] = None,
    ) -> int:
        """Count a community's invitations with the same filter semantics."""
        pass

    @abstractmethod
    async def find_live_for_email(
        self, email: EmailAddress, as_of: datetime
    ) -> list[Invitation]:
        """Find pending, unexpired invitations addressed to an email."""
        pass

    @abstractmethod
    async def find_stale_pending(self, as_of: datetime, limit: int) -> list[Invitation]:
        """Find stored-pending invitations whose deadline has passed."""
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The saved invitation

        Raises:
            IntegrityError: If a pending invitation already exists for this
                community/email, or the token digest is already taken
        """
        pass

    @abstractmethod
    async def transition(
        self, invitation: Invitation, from_status: InvitationStatus
    ) -> bool:
        """Write a new state only if the stored status is still ``from_status``.

        Args:
            invitation: Invitation carrying the new status and timestamps
            from_status: Status the caller observed

        Returns:
            True if written, False if the stored status had moved on
        """
        pass

    @abstractmethod
    async def cancel_pending_for_community(
        self, community_id: CommunityId, cancelled_at: datetime
    ) -> int:
        """Cancel every stored-pending invitation of a community.

        Returns:
            Number of invitations cancelled
        """
        pass

    @abstractmethod
    async def assign_invitee(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        """Record the registered user an invitation's email belongs to."""
        pass
