"""Mock notification provider for testing."""

from dishka import Scope, provide

from trove.adapter.email.dispatcher import RecordingInvitationDispatcher
from trove.domain.service import NotificationDispatcher
from trove.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Records invitation notices instead of sending email.

    Tests read the recorder to pick up the token from the accept link.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_recorder(self) -> RecordingInvitationDispatcher:
        return RecordingInvitationDispatcher()

    @provide(scope=Scope.APP)
    def get_dispatcher(
        self, recorder: RecordingInvitationDispatcher
    ) -> NotificationDispatcher:
        return recorder
