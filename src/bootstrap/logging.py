"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.infrastructure.observability import configure_structlog as _configure_structlog
from src.infrastructure.observability import get_environment


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog, defaulting to APP_ENVIRONMENT."""
    _configure_structlog(environment=environment or get_environment())


__all__ = ["configure_structlog"]
