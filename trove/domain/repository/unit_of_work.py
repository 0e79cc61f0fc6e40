"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups writes to several aggregates into one atomic step.

    Usage:
        async with unit_of_work.transaction():
            await community_repository.compare_and_swap(...)
            await invitation_repository.transition(...)

    If the block raises, none of its writes are visible afterwards.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block."""
        pass
