"""
Correlation ID context.

Carries the request correlation id across async boundaries using contextvars.

Dependencies: contextvars
System role: Request tracing across log records
"""

import uuid
from contextvars import ContextVar, Token

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        Token for restoring the previous value with ``reset_correlation_id``
    """
    return correlation_id_ctx.set(correlation_id or str(uuid.uuid4()))


def get_correlation_id() -> str:
    """Current correlation ID, or an empty string outside a request."""
    return correlation_id_ctx.get()


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    correlation_id_ctx.reset(token)
