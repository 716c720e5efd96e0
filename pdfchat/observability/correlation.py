"""
Correlation ID context management.

Propagates a per-request correlation ID across async boundaries using
contextvars, and exposes it to log records through a logging filter.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import logging
import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The correlation ID that was set
    """
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """Return the current correlation ID ("" outside a request)."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    """Clear correlation ID from context."""
    correlation_id_ctx.set("")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
