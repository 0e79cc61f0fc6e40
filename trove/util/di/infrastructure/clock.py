"""Clock infrastructure providers."""

from dishka import Scope, provide

from trove.domain.service import Clock, SystemClock
from trove.util.di.base import ProviderBase


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Production provider using wall-clock time."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide system clock."""
        return SystemClock()
