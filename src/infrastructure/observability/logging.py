"""Structured logging configuration with structlog.

Production emits one JSON object per line for log aggregation;
development renders colored console output. Both carry:

    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "recognition_added",
        "service": "pehchan-recognition",
        "correlation_id": "uuid",
        ...bound context (profile_id, recognizer_id, entry_id, ...)
    }

Environment Variables:
- LOG_LEVEL: Minimum level to emit (default: INFO)
- APP_ENVIRONMENT: "production" or "development" (default: production)

Usage:
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")

    from structlog import get_logger
    logger = get_logger(__name__)
    logger.info("recognition_added", profile_id=str(profile_id))
"""

import logging
import os
from typing import Any, cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
APP_ENVIRONMENT_ENV = "APP_ENVIRONMENT"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ENVIRONMENT = "production"
SERVICE_NAME = "pehchan-recognition"


def _get_log_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def get_environment() -> str:
    """Deployment environment from APP_ENVIRONMENT."""
    return os.getenv(APP_ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT).lower()


def _add_service_name(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog once at process start.

    Args:
        environment: "production" for JSON output, anything else for
            console output. Defaults to APP_ENVIRONMENT.
    """
    environment = environment or get_environment()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, _add_service_name),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processors: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=shared_processors + final_processors,
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
