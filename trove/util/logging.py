"""Logging configuration for the application."""

import logging
import sys

from trove.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure standard-library logging.

    Application events go through logfire; this keeps third-party
    loggers (SMTP, database driver) at a sensible level.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Set third-party loggers to WARNING to reduce noise
    for noisy in ("aiosmtplib", "asyncpg", "sqlalchemy.engine", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("trove").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
