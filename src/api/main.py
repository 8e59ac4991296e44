"""FastAPI application entry point for the Pehchan recognition engine."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from src import __version__
from src.api.middleware.logging_middleware import LoggingMiddleware
from src.api.routes.health import router as health_router
from src.api.routes.recognition import router as recognition_router
from src.bootstrap.database import close_database_engine
from src.bootstrap.logging import configure_structlog

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_structlog()
    logger.info("application_started", version=__version__)
    yield
    await close_database_engine()
    logger.info("application_stopped")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic RFC 7807 body; internals stay in the logs."""
    logger.exception(
        "unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "type": "urn:pehchan:internal-error",
            "title": "Internal Server Error",
            "status": 500,
            "detail": "An unexpected error occurred",
            "instance": str(request.url),
        },
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    application = FastAPI(
        title="Pehchan Recognition API",
        description="Recognition ledger and trust scoring for matrimonial profiles",
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(LoggingMiddleware)
    application.add_exception_handler(Exception, unhandled_error_handler)
    application.include_router(health_router)
    application.include_router(recognition_router)
    return application


app = create_app()
