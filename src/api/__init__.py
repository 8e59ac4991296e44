"""
API layer - FastAPI routes and HTTP concerns for the recognition engine.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- HTTP middleware

IMPORT RULES:
- CAN import from: application, domain
- Infrastructure is reached only through src.api.dependencies
"""

__all__: list[str] = []
