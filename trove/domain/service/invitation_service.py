"""Invitation domain service (the invitation lifecycle)."""

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from trove.config import APISettings, InvitationSettings
from trove.domain import policy
from trove.domain.error import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from trove.domain.model import Community, Invitation, User
from trove.domain.model.common import describe_validation_error
from trove.domain.policy import CommunityAction
from trove.domain.repository import InvitationRepository, UnitOfWork
from trove.domain.value import (
    CommunityId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    UserId,
)
from trove.domain.value.common import ValueObject

from .base import Service
from .clock import Clock
from .community_service import CommunityService
from .notification import InvitationNotice, NotificationDispatcher
from .token_issuer import TokenIssuer
from .user_service import UserService


class IssuedInvitation(ValueObject):
    """A new invitation and the only copy of its raw token."""

    invitation: Invitation
    token: InvitationToken


class InvitationView(ValueObject):
    """Invitation as shown to a token holder."""

    invitation: Invitation
    community: Optional[Community]
    inviter: Optional[User]


class AcceptedInvitation(ValueObject):
    """Result of an acceptance: the settled invitation and the new roster."""

    invitation: Invitation
    community: Community


def _token_hint(digest: str) -> str:
    return digest[:8] + "..."


class InvitationService(Service):
    """Owns the Invitation aggregate and its state machine.

    ``pending`` moves to exactly one of ``accepted``, ``declined``,
    ``cancelled`` or ``expired``. Expiry is lazy: a stored-pending
    invitation past its deadline is treated (and persisted) as expired the
    first time anyone touches it, and ``expire_stale`` sweeps the rest.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        community_service: CommunityService,
        user_service: UserService,
        token_issuer: TokenIssuer,
        dispatcher: NotificationDispatcher,
        unit_of_work: UnitOfWork,
        clock: Clock,
        invitation_settings: InvitationSettings,
        api_settings: APISettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            community_service: Registry used for authorization and roster writes
            user_service: Resolves invitees and inviters
            token_issuer: Mints bearer tokens
            dispatcher: Delivers invitation links
            unit_of_work: Atomic block for acceptance
            clock: Time source
            invitation_settings: TTL, link path and sweep size
            api_settings: Frontend URL for invitation links
        """
        self.invitation_repository = invitation_repository
        self.community_service = community_service
        self.user_service = user_service
        self.token_issuer = token_issuer
        self.dispatcher = dispatcher
        self.unit_of_work = unit_of_work
        self.clock = clock
        self.invitation_settings = invitation_settings
        self.api_settings = api_settings

    @property
    def ttl(self) -> timedelta:
        return timedelta(days=self.invitation_settings.ttl_days)

    def accept_url(self, token: InvitationToken) -> str:
        """Link an invitee follows to open an invitation."""
        return (
            f"{self.api_settings.frontend_url}"
            f"{self.invitation_settings.accept_path}/{token.root}"
        )

    async def invite(
        self,
        community_id: CommunityId,
        email: str,
        inviter_id: UserId,
        message: str = "",
    ) -> IssuedInvitation:
        """Invite an email address to a community.

        Args:
            community_id: Community to invite into
            email: Invitee email (normalized here)
            inviter_id: Acting admin or moderator
            message: Optional personal note

        Returns:
            The pending invitation and its raw token

        Raises:
            NotFoundError: If the community or inviter does not exist
            ForbiddenError: If the inviter is not an admin or moderator
            ValidationError: If the email or message is malformed
            ConflictError: If the invitee is already a member or a live
                invitation is already pending for this email
        """
        with logfire.span(
            "invitation_service.invite",
            community_id=str(community_id),
            inviter_id=str(inviter_id),
        ):
            community = await self.community_service.get_community(community_id)
            policy.authorize(community, inviter_id, CommunityAction.INVITE)

            try:
                address = EmailAddress(email)
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            inviter = await self.user_service.get_by_id(inviter_id)
            invitee = await self.user_service.get_user_by_email(address)
            if invitee and community.is_member(invitee.id):
                raise ConflictError("User is already a member of this community")

            existing = await self.invitation_repository.find_pending_for_email(
                community_id, address
            )
            if existing and not await self._expire_if_stale(existing, self.clock.now()):
                logfire.warn(
                    "Invitation already pending",
                    community_id=str(community_id),
                    invitation_id=str(existing.id),
                )
                raise ConflictError("Invitation already sent to this email")

            now = self.clock.now()
            issued = self.token_issuer.issue()
            try:
                invitation = Invitation(
                    id=InvitationId(uuid4()),
                    community_id=community_id,
                    inviter_id=inviter_id,
                    invitee_email=address,
                    invitee_user_id=invitee.id if invitee else None,
                    token_digest=issued.digest,
                    message=message,
                    status=InvitationStatus.PENDING,
                    expires_at=now + self.ttl,
                    created_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            try:
                saved = await self.invitation_repository.save(invitation)
            except IntegrityError as e:
                logfire.warn(
                    "Concurrent invitation insert rejected",
                    community_id=str(community_id),
                )
                raise ConflictError("Invitation already sent to this email") from e

            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                community_id=str(community_id),
                inviter_id=str(inviter_id),
                token=_token_hint(saved.token_digest),
            )

            await self._notify(saved, issued.token, community, inviter)
            return IssuedInvitation(invitation=saved, token=issued.token)

    async def get_by_token(self, token: InvitationToken) -> InvitationView:
        """Look up an invitation from its bearer token.

        Terminal invitations, including ones already stored as expired, are
        returned as they are so the caller can show their status.

        Raises:
            NotFoundError: If no invitation has this token
            ExpiredError: If a pending invitation is past its deadline
        """
        with logfire.span("invitation_service.get_by_token"):
            invitation = await self._find_by_token(token)
            await self._ensure_not_expired(invitation, self.clock.now())

            communities = await self.community_service.get_communities_by_ids(
                [invitation.community_id]
            )
            users = await self.user_service.get_users_by_ids([invitation.inviter_id])
            return InvitationView(
                invitation=invitation,
                community=communities.get(invitation.community_id),
                inviter=users.get(invitation.inviter_id),
            )

    async def accept(
        self, token: InvitationToken, user_id: UserId
    ) -> AcceptedInvitation:
        """Accept an invitation and join its community as a member.

        The roster append and the status change commit together or not at
        all.

        Raises:
            NotFoundError: If the token or user is unknown
            ExpiredError: If a pending invitation is past its deadline
            ConflictError: If the invitation is not pending, the user is
                already a member or the community is full
            ForbiddenError: If the user's email is not the invited one
        """
        with logfire.span("invitation_service.accept", user_id=str(user_id)):
            invitation = await self._find_by_token(token)
            now = self.clock.now()
            await self._ensure_not_expired(invitation, now)
            invitation.ensure_pending()

            user = await self.user_service.get_by_id(user_id)
            policy.authorize_accept(invitation, user)

            accepted = invitation.accept(user_id, now)
            async with self.unit_of_work.transaction():
                community = await self.community_service.add_member(
                    invitation.community_id, user_id
                )
                if not await self.invitation_repository.transition(
                    accepted, from_status=InvitationStatus.PENDING
                ):
                    logfire.warn(
                        "Invitation changed during acceptance",
                        invitation_id=str(invitation.id),
                    )
                    raise ConflictError("Invitation is no longer pending")

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                community_id=str(invitation.community_id),
                user_id=str(user_id),
            )
            return AcceptedInvitation(invitation=accepted, community=community)

    async def decline(self, token: InvitationToken) -> Invitation:
        """Decline an invitation. Holding the token is enough.

        Raises:
            NotFoundError: If no invitation has this token
            ExpiredError: If a pending invitation is past its deadline
            ConflictError: If the invitation is not pending
        """
        with logfire.span("invitation_service.decline"):
            invitation = await self._find_by_token(token)
            now = self.clock.now()
            await self._ensure_not_expired(invitation, now)

            declined = invitation.decline(now)
            if not await self.invitation_repository.transition(
                declined, from_status=InvitationStatus.PENDING
            ):
                raise ConflictError("Invitation is no longer pending")

            logfire.info("Invitation declined", invitation_id=str(invitation.id))
            return declined

    async def cancel(self, invitation_id: InvitationId, user_id: UserId) -> Invitation:
        """Withdraw a pending invitation (original inviter only).

        Raises:
            NotFoundError: If the invitation does not exist
            ForbiddenError: If the user is not the inviter
            ExpiredError: If the invitation ran out before being cancelled
            ConflictError: If the invitation is already terminal
        """
        with logfire.span(
            "invitation_service.cancel",
            invitation_id=str(invitation_id),
            user_id=str(user_id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if not invitation:
                logfire.warn("Invitation not found", invitation_id=str(invitation_id))
                raise NotFoundError("Invitation", str(invitation_id))

            now = self.clock.now()
            if await self._expire_if_stale(invitation, now):
                raise ExpiredError()

            policy.authorize_cancel(invitation, user_id)
            invitation.ensure_pending()

            cancelled = invitation.cancel(now)
            if not await self.invitation_repository.transition(
                cancelled, from_status=InvitationStatus.PENDING
            ):
                raise ConflictError("Invitation is no longer pending")

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            return cancelled

    async def list_for_community(
        self,
        community_id: CommunityId,
        user_id: UserId,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Invitation], int]:
        """List a community's invitations (admins and moderators only).

        Statuses are reported with lazy expiry applied.

        Returns:
            Tuple of (invitations on the page, total matching)
        """
        with logfire.span(
            "invitation_service.list_for_community",
            community_id=str(community_id),
            user_id=str(user_id),
            status=status.value if status else None,
        ):
            community = await self.community_service.get_community(community_id)
            policy.authorize(community, user_id, CommunityAction.VIEW_INVITATIONS)

            now = self.clock.now()
            invitations = await self.invitation_repository.find_by_community(
                community_id, as_of=now, status=status, limit=limit, offset=offset
            )
            total = await self.invitation_repository.count_by_community(
                community_id, as_of=now, status=status
            )
            return [invitation.as_of(now) for invitation in invitations], total

    async def list_for_user(self, user_id: UserId) -> list[Invitation]:
        """Live invitations addressed to the user's email.

        Invitations issued before the user registered get their
        ``invitee_user_id`` filled in here.
        """
        with logfire.span("invitation_service.list_for_user", user_id=str(user_id)):
            user = await self.user_service.get_by_id(user_id)
            invitations = await self.invitation_repository.find_live_for_email(
                user.email, as_of=self.clock.now()
            )

            resolved = []
            for invitation in invitations:
                if invitation.invitee_user_id is None:
                    await self.invitation_repository.assign_invitee(
                        invitation.id, user_id
                    )
                    invitation = invitation.revise(invitee_user_id=user_id)
                resolved.append(invitation)
            return resolved

    async def expire_stale(self, now: Optional[datetime] = None) -> int:
        """Persist ``expired`` on every stored-pending invitation past its deadline.

        Returns:
            Number of invitations flipped
        """
        as_of = now or self.clock.now()
        batch_size = self.invitation_settings.sweep_batch_size
        with logfire.span("invitation_service.expire_stale", as_of=as_of.isoformat()):
            flipped = 0
            while True:
                stale = await self.invitation_repository.find_stale_pending(
                    as_of, limit=batch_size
                )
                if not stale:
                    break
                for invitation in stale:
                    if await self.invitation_repository.transition(
                        invitation.expire(), from_status=InvitationStatus.PENDING
                    ):
                        flipped += 1
                if len(stale) < batch_size:
                    break

            logfire.info("Stale invitations expired", count=flipped)
            return flipped

    async def _find_by_token(self, token: InvitationToken) -> Invitation:
        digest = self.token_issuer.digest(token)
        invitation = await self.invitation_repository.find_by_token_digest(digest)
        if not invitation:
            logfire.warn("Invitation not found", token=_token_hint(digest))
            raise NotFoundError("Invitation", _token_hint(digest))
        return invitation

    async def _ensure_not_expired(self, invitation: Invitation, now: datetime) -> None:
        """Raise ExpiredError for a pending invitation past its deadline.

        The expiry is persisted first. An invitation already stored as
        expired is terminal like any other and left to ``ensure_pending``.
        """
        if await self._expire_if_stale(invitation, now):
            raise ExpiredError()

    async def _expire_if_stale(self, invitation: Invitation, now: datetime) -> bool:
        """Persist ``expired`` for a stored-pending invitation past its deadline.

        Returns:
            True if the invitation is expired as of ``now``
        """
        if invitation.status is not InvitationStatus.PENDING or not invitation.is_expired(now):
            return False

        if await self.invitation_repository.transition(
            invitation.expire(), from_status=InvitationStatus.PENDING
        ):
            logfire.info(
                "Invitation expired",
                invitation_id=str(invitation.id),
                expires_at=invitation.expires_at.isoformat(),
            )
        return True

    async def _notify(
        self,
        invitation: Invitation,
        token: InvitationToken,
        community: Community,
        inviter: User,
    ) -> None:
        """Hand the invitation link to the dispatcher; never fails the caller."""
        notice = InvitationNotice(
            to_email=invitation.invitee_email,
            community_name=community.name,
            inviter_name=inviter.display_name,
            message=invitation.message,
            accept_url=self.accept_url(token),
            expires_at=invitation.expires_at,
        )
        try:
            await self.dispatcher.dispatch(notice)
        except Exception as e:
            logfire.error(
                "Invitation notice failed",
                invitation_id=str(invitation.id),
                error=str(e),
            )
