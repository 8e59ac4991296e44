"""Domain models for the recognition engine.

Contains value objects and domain models that represent
core business concepts. These models are immutable and
contain no infrastructure dependencies.
"""

from src.domain.models.profile import ProfileRecord, ProfileStatus
from src.domain.models.recognition import (
    MAX_NOTES_LENGTH,
    MAX_RELATIONSHIP_LENGTH,
    RecognitionAggregate,
    RecognitionEntry,
    RecognitionEntryDraft,
    RecognitionLevel,
    RecognitionResult,
    RecognitionSummary,
    RecognitionType,
    RecognitionView,
    RequestMetadata,
)

__all__: list[str] = [
    "MAX_NOTES_LENGTH",
    "MAX_RELATIONSHIP_LENGTH",
    "ProfileRecord",
    "ProfileStatus",
    "RecognitionAggregate",
    "RecognitionEntry",
    "RecognitionEntryDraft",
    "RecognitionLevel",
    "RecognitionResult",
    "RecognitionSummary",
    "RecognitionType",
    "RecognitionView",
    "RequestMetadata",
]
