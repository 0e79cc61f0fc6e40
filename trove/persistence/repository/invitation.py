"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import ColumnElement, and_, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trove.domain.model import Invitation
from trove.domain.repository import InvitationRepository
from trove.domain.value import (
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    UserId,
)
from trove.persistence.mappers import invitation_to_dict, row_to_invitation
from trove.persistence.tables import invitations_table

_PENDING = InvitationStatus.PENDING.value


def effective_status_is(status: InvitationStatus, as_of: datetime) -> ColumnElement[bool]:
    """SQL predicate matching invitations whose status, with lazy expiry, is ``status``."""
    stored = invitations_table.c.status
    expires_at = invitations_table.c.expires_at
    match status:
        case InvitationStatus.PENDING:
            return and_(stored == _PENDING, expires_at > as_of)
        case InvitationStatus.EXPIRED:
            return or_(
                stored == InvitationStatus.EXPIRED.value,
                and_(stored == _PENDING, expires_at <= as_of),
            )
        case _:
            return stored == status.value


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token_digest(self, token_digest: str) -> Optional[Invitation]:
        """Find an invitation by its token digest (unique index)."""
        stmt = select(invitations_table).where(
            invitations_table.c.token_digest == token_digest
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending_for_email(
        self, community_id: CommunityId, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the stored-pending invitation covered by the partial unique index."""
        stmt = select(invitations_table).where(
            invitations_table.c.community_id == community_id,
            invitations_table.c.invitee_email == email.root,
            invitations_table.c.status == _PENDING,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

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
            community_id: Community ID
            as_of: Instant used for lazy expiry
            status: Optional effective-status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of matching invitations
        """
        stmt = select(invitations_table).where(
            invitations_table.c.community_id == community_id
        )
        if status:
            stmt = stmt.where(effective_status_is(status, as_of))
        stmt = (
            stmt.order_by(
                invitations_table.c.created_at.desc(), invitations_table.c.id.asc()
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def count_by_community(
        self,
        community_id: CommunityId,
        as_of: datetime,
        status: Optional[InvitationStatus] = None,
    ) -> int:
        """Count a community's invitations."""
        stmt = (
            select(func.count())
            .select_from(invitations_table)
            .where(invitations_table.c.community_id == community_id)
        )
        if status:
            stmt = stmt.where(effective_status_is(status, as_of))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_live_for_email(
        self, email: EmailAddress, as_of: datetime
    ) -> list[Invitation]:
        """Find pending, unexpired invitations addressed to an email."""
        stmt = (
            select(invitations_table)
            .where(
                invitations_table.c.invitee_email == email.root,
                effective_status_is(InvitationStatus.PENDING, as_of),
            )
            .order_by(invitations_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def find_stale_pending(self, as_of: datetime, limit: int) -> list[Invitation]:
        """Find stored-pending invitations past their deadline, oldest deadline first."""
        stmt = (
            select(invitations_table)
            .where(
                invitations_table.c.status == _PENDING,
                invitations_table.c.expires_at <= as_of,
            )
            .order_by(invitations_table.c.expires_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def save(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation inside a savepoint.

        Raises:
            IntegrityError: If the partial unique index or the token digest
                index rejects the row
        """
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return invitation

    async def transition(
        self, invitation: Invitation, from_status: InvitationStatus
    ) -> bool:
        """Write status and timestamps if the stored status is still ``from_status``."""
        stmt = (
            update(invitations_table)
            .where(
                invitations_table.c.id == invitation.id,
                invitations_table.c.status == from_status.value,
            )
            .values(
                status=invitation.status.value,
                invitee_user_id=invitation.invitee_user_id,
                accepted_at=invitation.accepted_at,
                declined_at=invitation.declined_at,
                cancelled_at=invitation.cancelled_at,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def cancel_pending_for_community(
        self, community_id: CommunityId, cancelled_at: datetime
    ) -> int:
        """Cancel every stored-pending invitation of a community."""
        stmt = (
            update(invitations_table)
            .where(
                invitations_table.c.community_id == community_id,
                invitations_table.c.status == _PENDING,
            )
            .values(status=InvitationStatus.CANCELLED.value, cancelled_at=cancelled_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def assign_invitee(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        """Record the registered user behind the invitee email."""
        stmt = (
            update(invitations_table)
            .where(
                invitations_table.c.id == invitation_id,
                invitations_table.c.invitee_user_id.is_(None),
            )
            .values(invitee_user_id=user_id)
        )
        await self.session.execute(stmt)
        await self.session.flush()
