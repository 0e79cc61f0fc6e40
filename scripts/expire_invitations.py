#!/usr/bin/env python3
"""Flip pending invitations past their deadline to ``expired``.

Reads already treat such invitations as expired; this sweep only brings
the stored status in line so listings and audits agree. Safe to run on
a schedule (cron, k8s CronJob).
"""

import asyncio
import sys

import logfire

from trove.application.usecase.invitation import (
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
)
from trove.config import Settings
from trove.util.di.container import create_container
from trove.util.logging import setup_logging
from trove.util.observability import configure_logfire


async def sweep() -> int:
    """Run one sweep and return the number of invitations expired."""
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ExpireInvitationsUseCase)
            response = await use_case.execute(ExpireInvitationsRequest())
        return response.expired
    finally:
        await container.close()


def main() -> int:
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    try:
        expired = asyncio.run(sweep())
        logfire.info("Invitation sweep finished", expired=expired)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
