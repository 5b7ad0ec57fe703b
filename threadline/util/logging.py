"""Logging configuration for the application."""

import logging
import sys

from threadline.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_level(settings: Settings) -> int:
    """Pick the log level for an environment.

    Debug wins over everything; production only reports warnings.
    """
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Log records go to stderr so that command output on stdout stays
    machine-readable.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("threadline").setLevel(level)
    # Container resolution chatter is only useful when debugging wiring
    logging.getLogger("dishka").setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
