"""Ledger store errors.

This module provides exception classes for recognition ledger storage
operations. These exceptions are raised by RecognitionLedgerProtocol
implementations when storage-related failures occur.

Note: A uniqueness violation on (profile, recognizer, type) raises
DuplicateRecognitionError, not LedgerStoreError.
"""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import RecognitionEngineError


class LedgerStoreError(RecognitionEngineError):
    """Base exception for ledger store operations.

    Raised for connection failures, transaction failures and constraint
    violations not attributable to a duplicate recognition. The whole
    add-recognition call may be retried: the uniqueness constraint makes
    a retried request either succeed once or fail as a duplicate.

    Usage:
        raise LedgerStoreError("Failed to append entry: connection timeout")
    """

    pass


class LedgerStoreUnavailableError(LedgerStoreError):
    """Raised when the ledger store cannot be reached.

    Usage:
        raise LedgerStoreUnavailableError("Failed to connect to database")
    """

    pass


class RecognitionScoreRecomputeError(RecognitionEngineError):
    """Raised when the score snapshot fails after the ledger advanced.

    The entry is durably recorded, but the profile's cached score is
    stale. The snapshot can be rebuilt from the ledger at any time.

    Attributes:
        profile_id: Profile whose snapshot is stale.
        entry_id: The entry that was persisted.
    """

    def __init__(self, profile_id: UUID, entry_id: UUID) -> None:
        self.profile_id = profile_id
        self.entry_id = entry_id
        super().__init__(
            f"Recognition {entry_id} was recorded but the score for profile "
            f"{profile_id} could not be updated"
        )
