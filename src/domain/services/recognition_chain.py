"""Recognition chain verification.

Pure walks over a profile's ledger entries. A chain is intact when,
ordered by ``created_at``, every entry's ``previous_entry_hash`` equals
the ``entry_hash`` of the entry before it and the first entry has none.

A fork is two or more entries claiming the same predecessor. Under
per-profile append serialization this cannot happen, so a fork means
the ledger was written around the engine.

Breaks and forks are reported as results. Nothing here raises for a
damaged chain.

Note: This is pure domain logic with no infrastructure dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from src.domain.models.recognition import RecognitionEntry


@dataclass(frozen=True)
class ChainVerificationResult:
    """Outcome of a chain walk.

    Attributes:
        valid: True if every link matched.
        broken_at_index: Index (in chronological order) of the first entry
            whose link did not match, or None.
        entry_id: ID of that entry, or None.
        entries_checked: Number of entries walked.
    """

    valid: bool
    broken_at_index: int | None = None
    entry_id: UUID | None = None
    entries_checked: int = 0

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "broken_at_index": self.broken_at_index,
            "entry_id": str(self.entry_id) if self.entry_id else None,
            "entries_checked": self.entries_checked,
        }


@dataclass(frozen=True)
class RecognitionForkReport:
    """Two entries that claim the same predecessor.

    Attributes:
        previous_entry_hash: The shared predecessor hash (None for two
            entries both claiming to be first).
        conflicting_entry_ids: The two conflicting entries.
        entry_hashes: Their entry hashes, in the same order.
    """

    previous_entry_hash: str | None
    conflicting_entry_ids: tuple[UUID, UUID]
    entry_hashes: tuple[str, str]

    def to_dict(self) -> dict:
        return {
            "previous_entry_hash": self.previous_entry_hash,
            "conflicting_entry_ids": [str(i) for i in self.conflicting_entry_ids],
            "entry_hashes": list(self.entry_hashes),
        }


def chronological(entries: Sequence[RecognitionEntry]) -> list[RecognitionEntry]:
    """Sort entries oldest first.

    ``sorted`` is stable, so entries sharing a timestamp keep the order
    they were supplied in (the store's insertion order).
    """
    return sorted(entries, key=lambda entry: entry.created_at)


def verify_recognition_chain(
    entries: Sequence[RecognitionEntry],
) -> ChainVerificationResult:
    """Walk the chain and report the first broken link.

    Args:
        entries: All entries of one profile in insertion order.

    Returns:
        ChainVerificationResult; valid for an empty ledger.
    """
    ordered = chronological(entries)
    expected_previous: str | None = None

    for index, entry in enumerate(ordered):
        if entry.previous_entry_hash != expected_previous:
            return ChainVerificationResult(
                valid=False,
                broken_at_index=index,
                entry_id=entry.entry_id,
                entries_checked=index + 1,
            )
        expected_previous = entry.entry_hash

    return ChainVerificationResult(valid=True, entries_checked=len(ordered))


def detect_recognition_fork(
    entries: Sequence[RecognitionEntry],
) -> RecognitionForkReport | None:
    """Find two entries that claim the same previous hash.

    Returns immediately upon the first conflict. Only two entries are
    reported even if more share the same predecessor.
    """
    if len(entries) < 2:
        return None

    seen: dict[str | None, RecognitionEntry] = {}
    for entry in chronological(entries):
        existing = seen.get(entry.previous_entry_hash)
        if existing is not None and existing.entry_id != entry.entry_id:
            return RecognitionForkReport(
                previous_entry_hash=entry.previous_entry_hash,
                conflicting_entry_ids=(existing.entry_id, entry.entry_id),
                entry_hashes=(existing.entry_hash, entry.entry_hash),
            )
        seen.setdefault(entry.previous_entry_hash, entry)

    return None


def find_tampered_entries(entries: Sequence[RecognitionEntry]) -> list[UUID]:
    """IDs of entries whose stored hash no longer matches their fields."""
    return [
        entry.entry_id
        for entry in chronological(entries)
        if not entry.verify_entry_hash()
    ]
