"""Time source for domain services."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Provides the current instant (timezone-aware, UTC)."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock(Clock):
    """Clock that only moves when told to.

    Used by tests to step across invitation deadlines.
    """

    def __init__(self, at: datetime | None = None) -> None:
        self._now = at or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward and return the new instant."""
        self._now = self._now + delta
        return self._now

    def set(self, at: datetime) -> None:
        self._now = at
