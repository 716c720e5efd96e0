"""
Logger configuration.

Configures stdout logging with ISO timestamps and correlation ID injection.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from pdfchat.observability.correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "aiosqlite", "pypdf", "google")


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure Python logging with ISO timestamp and correlation ID.

    Args:
        level: Root log level name or number
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    )

    root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

