"""In-memory stub for RecognitionLedgerProtocol.

This stub simulates the ledger table's behavior including:
- Unique constraint enforcement (profile_id, recognizer_id, recognition_type)
- Per-profile append serialization (one asyncio.Lock per profile)
- Chain linkage under the lock
- Insertion order as the tiebreak for equal timestamps

Thread-safety note: Safe for concurrent coroutines on one event loop, NOT
for use across threads.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from uuid import UUID

from src.domain.errors import DuplicateRecognitionError, LedgerStoreError
from src.domain.models.recognition import (
    RecognitionEntry,
    RecognitionEntryDraft,
    RecognitionType,
)
from src.domain.services.recognition_chain import chronological


class RecognitionLedgerStub:
    """In-memory stub implementation of RecognitionLedgerProtocol.

    This stub maintains:
    - A list of entries per profile, in insertion order
    - An index of entries keyed by (profile_id, recognizer_id, type)
    - A lock per profile guarding read-latest-then-insert

    Args:
        yield_on_append: When True, ``append`` yields to the event loop
            between reading the latest entry and inserting. Tests use this
            to force concurrent appends to interleave.
    """

    def __init__(self, yield_on_append: bool = False) -> None:
        self._entries: dict[UUID, list[RecognitionEntry]] = defaultdict(list)
        self._by_triple: dict[tuple[UUID, UUID, RecognitionType], RecognitionEntry] = {}
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._yield_on_append = yield_on_append
        self._append_error: Exception | None = None
        self._list_error: Exception | None = None

    def _lock_for(self, profile_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(profile_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[profile_id] = lock
        return lock

    async def append(self, draft: RecognitionEntryDraft) -> RecognitionEntry:
        """Link the draft to the latest entry and store it.

        Raises:
            DuplicateRecognitionError: Unique constraint violation.
            LedgerStoreError: If a failure was injected.
        """
        if self._append_error is not None:
            raise self._append_error

        async with self._lock_for(draft.profile_id):
            latest = self._latest(draft.profile_id)
            if self._yield_on_append:
                await asyncio.sleep(0)

            key = (draft.profile_id, draft.recognizer_id, draft.recognition_type)
            existing = self._by_triple.get(key)
            if existing is not None:
                raise DuplicateRecognitionError(
                    profile_id=draft.profile_id,
                    recognizer_id=draft.recognizer_id,
                    recognition_type=draft.recognition_type.value,
                    existing_entry_id=existing.entry_id,
                    existing_created_at=existing.created_at,
                )

            entry = draft.link(latest)
            self._entries[draft.profile_id].append(entry)
            self._by_triple[key] = entry
            return entry

    async def exists(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> bool:
        return (profile_id, recognizer_id, RecognitionType(recognition_type)) in (
            self._by_triple
        )

    async def get_for_triple(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> RecognitionEntry | None:
        return self._by_triple.get(
            (profile_id, recognizer_id, RecognitionType(recognition_type))
        )

    async def get_latest(self, profile_id: UUID) -> RecognitionEntry | None:
        return self._latest(profile_id)

    async def list_for_profile(
        self, profile_id: UUID, newest_first: bool = False
    ) -> list[RecognitionEntry]:
        """Return a profile's entries, oldest first unless newest_first.

        Raises:
            LedgerStoreError: If a failure was injected.
        """
        if self._list_error is not None:
            raise self._list_error
        ordered = chronological(self._entries.get(profile_id, []))
        if newest_first:
            ordered.reverse()
        return ordered

    def _latest(self, profile_id: UUID) -> RecognitionEntry | None:
        entries = self._entries.get(profile_id)
        if not entries:
            return None
        return chronological(entries)[-1]

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._entries.clear()
        self._by_triple.clear()
        self._locks.clear()
        self._append_error = None
        self._list_error = None

    def fail_appends(self, error: Exception | None = None) -> None:
        """Make every append raise ``error`` (LedgerStoreError by default)."""
        self._append_error = error or LedgerStoreError("Injected append failure")

    def fail_reads(self, error: Exception | None = None) -> None:
        """Make every list_for_profile raise ``error``."""
        self._list_error = error or LedgerStoreError("Injected read failure")

    def clear_failures(self) -> None:
        self._append_error = None
        self._list_error = None

    def insert_raw(self, entry: RecognitionEntry) -> None:
        """Store an entry as-is, bypassing linkage and the unique index.

        Simulates rows written around the engine (forks, manual inserts).
        """
        self._entries[entry.profile_id].append(entry)
        self._by_triple.setdefault(entry.triple, entry)

    def overwrite_entry(self, entry: RecognitionEntry) -> None:
        """Replace a stored entry with the same entry_id.

        Simulates tampering with a persisted row.

        Raises:
            KeyError: If no stored entry has that id.
        """
        entries = self._entries[entry.profile_id]
        for index, stored in enumerate(entries):
            if stored.entry_id == entry.entry_id:
                entries[index] = entry
                self._by_triple[entry.triple] = entry
                return
        raise KeyError(entry.entry_id)

    def get_entry_count(self, profile_id: UUID | None = None) -> int:
        if profile_id is not None:
            return len(self._entries.get(profile_id, []))
        return sum(len(entries) for entries in self._entries.values())


# Singleton instance for dependency injection
_recognition_ledger_stub: RecognitionLedgerStub | None = None


def get_recognition_ledger_stub() -> RecognitionLedgerStub:
    """Get the singleton recognition ledger stub."""
    global _recognition_ledger_stub
    if _recognition_ledger_stub is None:
        _recognition_ledger_stub = RecognitionLedgerStub()
    return _recognition_ledger_stub


def reset_recognition_ledger_stub() -> None:
    """Reset the singleton ledger stub.

    Creates a new instance, clearing all state.
    Should be called in test fixtures.
    """
    global _recognition_ledger_stub
    _recognition_ledger_stub = RecognitionLedgerStub()
