"""Notification dispatcher interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from trove.domain.value import EmailAddress
from trove.domain.value.common import ValueObject


class InvitationNotice(ValueObject):
    """Everything needed to deliver one invitation link."""

    to_email: EmailAddress
    community_name: str
    inviter_name: str
    message: str
    accept_url: str
    expires_at: datetime


class NotificationDispatcher(ABC):
    """Delivers invitation notices out-of-band (email).

    Implementations live in the adapter layer. Delivery failures raise, and
    callers log them without touching the persisted invitation.
    """

    @abstractmethod
    async def dispatch(self, notice: InvitationNotice) -> None:
        """Deliver a notice.

        Raises:
            NotificationError: If delivery failed
        """
        pass
