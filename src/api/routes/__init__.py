"""
API routes for the recognition engine.

Available routers:
- health: Health check endpoint
- recognition: Profile recognition, chain verification and fraud risk
"""

from src.api.routes.health import router as health_router
from src.api.routes.recognition import router as recognition_router

__all__: list[str] = ["health_router", "recognition_router"]
