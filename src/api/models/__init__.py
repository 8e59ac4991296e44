"""
API models (Pydantic DTOs) for the recognition engine.
"""

from src.api.models.health import HealthResponse
from src.api.models.recognition import (
    AddRecognitionRequest,
    AddRecognitionResponse,
    ChainVerificationResponse,
    FraudRiskResponse,
    RecognitionAggregateResponse,
    RecognitionEntryResponse,
    RecognitionErrorResponse,
    RecognitionListResponse,
    RecognitionViewResponse,
)

__all__: list[str] = [
    "AddRecognitionRequest",
    "AddRecognitionResponse",
    "ChainVerificationResponse",
    "FraudRiskResponse",
    "HealthResponse",
    "RecognitionAggregateResponse",
    "RecognitionEntryResponse",
    "RecognitionErrorResponse",
    "RecognitionListResponse",
    "RecognitionViewResponse",
]
