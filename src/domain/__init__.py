"""
Domain layer - Pure business logic for the recognition engine.

This layer contains:
- Domain models (ledger entries, aggregates, profile records)
- Pure domain services (hashing, scoring, chain walks, fraud risk)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib, typing and src.config imports are allowed.
"""

from src.domain.exceptions import RecognitionEngineError
from src.domain.models import (
    RecognitionAggregate,
    RecognitionEntry,
    RecognitionLevel,
    RecognitionType,
)

__all__: list[str] = [
    "RecognitionEngineError",
    "RecognitionAggregate",
    "RecognitionEntry",
    "RecognitionLevel",
    "RecognitionType",
]
