"""Logging configuration for the application.

Application events go through logfire; this configures the stdlib loggers
used by uvicorn, SQLAlchemy and httpx.
"""

import logging
import sys

from colloquy.config import Settings


def setup_logging(settings: Settings) -> int:
    """Configure application logging.

    Args:
        settings: Application settings

    Returns:
        The configured root log level
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # SQL echo is controlled by the engine in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    logging.getLogger("colloquy").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
    return level
