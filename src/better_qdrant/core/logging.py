"""Logging configuration."""

import logging
import sys
from typing import TextIO

from better_qdrant.config import get_settings

# Third-party loggers that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure application logging once for the process.

    Args:
        stream: Destination for log records; stdout by default. Command-line
            and stdio entry points pass stderr so stdout carries only output.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
    )

    quiet_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        logging.Logger: Configured logger instance.
    """
    return logging.getLogger(name)
