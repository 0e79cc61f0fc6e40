"""Mock providers for testing."""

from .clock import MockClockProvider
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
