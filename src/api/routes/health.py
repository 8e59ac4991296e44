"""Health check endpoint."""

from fastapi import APIRouter

from src import __version__
from src.api.models.health import HealthResponse

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check. Does not touch the database."""
    return HealthResponse(status="healthy", version=__version__)
