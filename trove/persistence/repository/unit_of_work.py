"""PostgreSQL unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from trove.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Runs a block inside a SAVEPOINT of the request's session.

    The request transaction itself is committed by the session provider;
    a failing block only rolls back to its savepoint, so the rest of the
    request (including its error response) is unaffected.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
