"""API dependencies for dependency injection."""

from src.api.dependencies.recognition import (
    get_fraud_risk_service,
    get_recognition_chain_service,
    get_recognition_service,
    reset_recognition_dependencies,
)

__all__: list[str] = [
    "get_fraud_risk_service",
    "get_recognition_chain_service",
    "get_recognition_service",
    "reset_recognition_dependencies",
]
