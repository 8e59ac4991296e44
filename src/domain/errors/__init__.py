"""Domain errors for the recognition engine.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from RecognitionEngineError.
"""

from src.domain.errors.ledger import (
    LedgerStoreError,
    LedgerStoreUnavailableError,
    RecognitionScoreRecomputeError,
)
from src.domain.errors.recognition import (
    ConflictError,
    DeletedProfileError,
    DuplicateRecognitionError,
    ForbiddenError,
    ImmutableEntryError,
    NotFoundError,
    ProfileNotFoundError,
    RecognitionError,
    RecognizerNotFoundError,
    UnverifiedRecognizerError,
)

__all__: list[str] = [
    "RecognitionError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "RecognizerNotFoundError",
    "ProfileNotFoundError",
    "UnverifiedRecognizerError",
    "DuplicateRecognitionError",
    "DeletedProfileError",
    "ImmutableEntryError",
    "LedgerStoreError",
    "LedgerStoreUnavailableError",
    "RecognitionScoreRecomputeError",
]
