"""Observability infrastructure: structured logging and correlation IDs.

Usage:
    from src.infrastructure.observability import (
        configure_structlog,
        get_correlation_id,
        set_correlation_id,
    )

    configure_structlog(environment="production")
"""

from src.infrastructure.observability.correlation import (
    CORRELATION_ID_HEADER,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from src.infrastructure.observability.logging import (
    configure_structlog,
    get_environment,
)

__all__: list[str] = [
    "CORRELATION_ID_HEADER",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "get_environment",
    "reset_correlation_id",
    "set_correlation_id",
]
