"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from trove.domain.repository.unit_of_work import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Restores the store snapshot taken on entry if the block raises.

    The snapshot covers the whole store, so a rollback also discards writes
    other coroutines made to the same store while the block ran. Tests that
    share a store between concurrent tasks must not rely on those writes
    surviving another task's rollback.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = self.store.snapshot()
        try:
            yield
        except BaseException:
            self.store.restore(snapshot)
            raise
