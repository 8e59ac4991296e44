"""Recognition API request/response models.

Pydantic models for the profile recognition endpoints. Request limits
match the ledger entry model: relationship up to 100 characters, notes up
to 500.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from src.domain.models.recognition import (
    MAX_NOTES_LENGTH,
    MAX_RELATIONSHIP_LENGTH,
    RecognitionLevel,
    RecognitionType,
)
from src.domain.services.fraud_risk import FraudRiskLevel

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class AddRecognitionRequest(BaseModel):
    """Request to recognize a profile.

    The recognizer is taken from the X-Recognizer-ID header, not the body.
    """

    type: RecognitionType = Field(..., description="Kind of recognition")
    relationship: str | None = Field(
        default=None,
        max_length=MAX_RELATIONSHIP_LENGTH,
        description="How the recognizer knows the candidate (e.g. 'neighbor')",
    )
    notes: str | None = Field(
        default=None,
        max_length=MAX_NOTES_LENGTH,
        description="Free-text notes",
    )


class RecognitionAggregateResponse(BaseModel):
    """A profile's recognition snapshot."""

    score: float = Field(..., ge=0, description="Decayed score, one decimal place")
    level: RecognitionLevel
    recognizer_count: int = Field(..., ge=0, description="Distinct recognizers")
    last_recognition_at: DateTimeWithZ | None = None


class RecognitionEntryResponse(BaseModel):
    """A persisted ledger entry."""

    entry_id: UUID
    profile_id: UUID
    recognizer_id: UUID
    type: RecognitionType
    relationship: str | None = None
    notes: str | None = None
    base_weight: float
    recognizer_role: str
    entry_hash: str = Field(..., description="SHA-256 hex digest")
    previous_entry_hash: str | None = None
    created_at: DateTimeWithZ


class AddRecognitionResponse(BaseModel):
    """Response after successfully recognizing a profile."""

    message: str = "Recognition added successfully"
    recognition: RecognitionEntryResponse
    new_score: RecognitionAggregateResponse


class RecognitionViewResponse(BaseModel):
    """A recognition with the recognizer resolved."""

    entry_id: UUID
    type: RecognitionType
    relationship: str | None = None
    notes: str | None = None
    base_weight: float
    recognizer_name: str
    recognizer_role: str
    created_at: DateTimeWithZ


class RecognitionListResponse(BaseModel):
    """Recognitions (newest first) with the current aggregate."""

    recognitions: list[RecognitionViewResponse]
    summary: RecognitionAggregateResponse


class ChainVerificationResponse(BaseModel):
    """Result of walking a profile's recognition chain."""

    profile_id: UUID
    valid: bool
    broken_at_index: int | None = None
    entry_id: UUID | None = None
    entries_checked: int = 0
    tampered_entry_ids: list[UUID] = Field(default_factory=list)


class FraudRiskResponse(BaseModel):
    """Fraud risk assessment of a profile."""

    profile_id: UUID
    score: int = Field(..., ge=0, le=100)
    level: FraudRiskLevel
    reasons: list[str]


class RecognitionErrorResponse(BaseModel):
    """Error response for recognition operations (RFC 7807).

    Attributes:
        type: Error type URI.
        title: Human-readable error title.
        status: HTTP status code.
        detail: Human-readable reason, safe to show to the caller.
        instance: Request URL that caused the error.
    """

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Human-readable error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Detailed error message")
    instance: str = Field(..., description="Request path that caused the error")
    profile_id: UUID | None = None
    recognizer_id: UUID | None = None
    recognition_type: RecognitionType | None = None
    existing_entry_id: UUID | None = None
