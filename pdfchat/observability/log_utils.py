"""
Logging utilities for safe structured logging.

Converts arbitrary context values into short strings and passes them as
``extra`` without clobbering built-in LogRecord attributes.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

# Attributes set by logging.LogRecord itself; extra keys must not reuse them
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Collections and binary payloads are summarized rather than dumped.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (bytes, bytearray)):
            val_str = f"{type(value).__name__}({len(value)} bytes)"
        elif isinstance(value, (list, tuple, set)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {
        (f"ctx_{key}" if key in _RESERVED_ATTRS else key): safe_log_value(val)
        for key, val in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    /,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    /,
    **context,
) -> None:
    """
    Log an exception with its type, message and optional details.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = _safe_context(context)
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": safe_log_value(str(exc)),
    })
    details = getattr(exc, "details", None)
    if details:
        safe_context["error_details"] = safe_log_value(repr(details))
    logger.error(message, exc_info=exc, extra=safe_context)
