"""Request correlation IDs.

Each HTTP request carries one correlation ID, taken from the
``X-Correlation-ID`` header or freshly generated. It lives in a
ContextVar so every log line emitted while serving the request, however
deep in the service stack, carries the same ID.

Usage:
    token = set_correlation_id(header_value or generate_correlation_id())
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

CORRELATION_ID_HEADER = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation ID, or an empty string outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the correlation ID for the current context.

    Returns:
        Token for restoring the previous value with reset_correlation_id.
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``correlation_id`` when one is set.

    An explicitly bound correlation_id is left untouched.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
