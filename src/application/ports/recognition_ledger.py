"""Recognition ledger port.

This module defines the contract for the append-only recognition ledger.

Append contract:
    ``append(draft)`` serializes concurrent appends for the same profile,
    reads the latest committed entry, links the draft to it and inserts the
    linked entry, all as one atomic step. Two appends for one profile can
    therefore never claim the same predecessor. A draft stamped earlier
    than the latest entry is re-stamped to that entry's time, so created_at
    order always agrees with link order.

Uniqueness contract:
    At most one entry per (profile_id, recognizer_id, recognition_type).
    A violating append raises DuplicateRecognitionError. This is the
    authoritative duplicate guard; the service's pre-check is best-effort.

Entries are never updated or deleted.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.recognition import (
    RecognitionEntry,
    RecognitionEntryDraft,
    RecognitionType,
)


class RecognitionLedgerProtocol(Protocol):
    """Protocol for recognition ledger storage.

    Methods:
        append: Link and persist a new entry atomically
        exists: Check whether a triple is already recorded
        get_for_triple: Fetch the entry recorded for a triple
        get_latest: Fetch the most recent entry for a profile
        list_for_profile: Fetch all entries for a profile
    """

    async def append(self, draft: RecognitionEntryDraft) -> RecognitionEntry:
        """Link a draft to the profile's latest entry and persist it.

        Args:
            draft: Validated entry without chain linkage.

        Returns:
            The persisted RecognitionEntry with previous_entry_hash set.

        Raises:
            DuplicateRecognitionError: If the triple is already recorded.
            LedgerStoreError: If persistence fails.
        """
        ...

    async def exists(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> bool:
        """Check whether the triple already has an entry."""
        ...

    async def get_for_triple(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> RecognitionEntry | None:
        """Fetch the entry recorded for a triple, if any."""
        ...

    async def get_latest(self, profile_id: UUID) -> RecognitionEntry | None:
        """Fetch the most recent entry for a profile.

        Returns:
            The latest entry by created_at (ties by insertion order), or
            None when the profile has no entries.
        """
        ...

    async def list_for_profile(
        self, profile_id: UUID, newest_first: bool = False
    ) -> list[RecognitionEntry]:
        """Fetch all entries for a profile.

        Args:
            profile_id: The profile.
            newest_first: Order descending when True; chronological
                (insertion order on ties) otherwise.
        """
        ...
