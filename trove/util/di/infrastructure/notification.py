"""Notification infrastructure providers."""

from dishka import Scope, provide

from trove.adapter.email.dispatcher import SmtpInvitationDispatcher
from trove.config import EmailSettings
from trove.domain.service import NotificationDispatcher
from trove.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production provider sending invitation emails over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_dispatcher(self, email_settings: EmailSettings) -> NotificationDispatcher:
        """Provide SMTP dispatcher."""
        return SmtpInvitationDispatcher(email_settings=email_settings)
