"""Recognition domain models.

This module defines the domain models of the recognition ledger:
- RecognitionType: Closed set of attestation kinds
- RecognitionLevel: Trust category derived from score
- RequestMetadata: Caller metadata kept for audit
- RecognitionEntryDraft: A validated entry not yet linked into the chain
- RecognitionEntry: Immutable, hash-chained ledger entry
- RecognitionAggregate: Point-in-time score snapshot for a profile
- RecognitionView: Read projection with resolved recognizer details

Invariants:
- At most one entry per (profile_id, recognizer_id, recognition_type)
- base_weight is fixed at write time and never recomputed
- For one profile ordered by created_at, each previous_entry_hash equals
  the entry_hash of the entry before it (None for the first entry)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from src.domain.primitives import DeletePreventionMixin
from src.domain.services.recognition_hashing import (
    compute_entry_hash,
    is_valid_sha256_hex,
)

MAX_RELATIONSHIP_LENGTH: int = 100
MAX_NOTES_LENGTH: int = 500


class RecognitionType(str, Enum):
    """Kind of attestation a recognizer gives."""

    KNOW_PERSONALLY = "know_personally"
    KNOW_FAMILY = "know_family"
    VERIFIED_DOCUMENTS = "verified_documents"
    COMMUNITY_REFERENCE = "community_reference"


class RecognitionLevel(str, Enum):
    """Trust level derived from a recognition score."""

    NEW = "new"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class RequestMetadata:
    """Metadata of the request that submitted a recognition.

    Attributes:
        ip_address: Caller IP address, if known.
        user_agent: Caller User-Agent header, if known.
    """

    ip_address: str | None = None
    user_agent: str | None = None


def _validate_free_text(name: str, value: str | None, max_length: int) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    if len(value) > max_length:
        raise ValueError(
            f"{name} must be at most {max_length} characters, got {len(value)}"
        )


@dataclass(frozen=True)
class RecognitionEntryDraft:
    """A recognition entry before it is linked into the profile's chain.

    The ledger store links a draft by reading the latest committed entry
    for the profile under its per-profile write serialization.

    Attributes:
        entry_id: Unique identifier for the entry.
        profile_id: Profile being recognized.
        recognizer_id: User giving the recognition.
        recognition_type: Kind of attestation.
        base_weight: role weight x type multiplier at write time.
        recognizer_role: Snapshot of the recognizer's role at write time.
        entry_hash: SHA-256 over profile, recognizer, type and created_at.
        created_at: Write timestamp (UTC, millisecond precision).
        relationship: Optional free-text relationship ("neighbor").
        notes: Optional free-text notes.
        ip_address: Request IP address for audit.
        user_agent: Request User-Agent for audit.
    """

    entry_id: UUID
    profile_id: UUID
    recognizer_id: UUID
    recognition_type: RecognitionType
    base_weight: float
    recognizer_role: str
    entry_hash: str
    created_at: datetime
    relationship: str | None = None
    notes: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    def __post_init__(self) -> None:
        """Validate fields.

        Raises:
            ValueError: If any field validation fails.
        """
        if not isinstance(self.recognition_type, RecognitionType):
            object.__setattr__(
                self, "recognition_type", RecognitionType(self.recognition_type)
            )
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (UTC)")
        if self.base_weight < 0:
            raise ValueError(f"base_weight must be non-negative, got {self.base_weight}")
        if not self.recognizer_role:
            raise ValueError("recognizer_role must be non-empty")
        if not is_valid_sha256_hex(self.entry_hash):
            raise ValueError(
                f"entry_hash must be a 64-character lowercase hex string, "
                f"got: {self.entry_hash!r}"
            )
        _validate_free_text("relationship", self.relationship, MAX_RELATIONSHIP_LENGTH)
        _validate_free_text("notes", self.notes, MAX_NOTES_LENGTH)

    def link(self, previous: RecognitionEntry | None) -> RecognitionEntry:
        """Produce the immutable ledger entry chained to its predecessor.

        A draft stamped before its predecessor (it waited on the profile's
        write lock behind a later request) takes the predecessor's
        timestamp, and its hash is recomputed. Chronological order then
        matches link order, with insertion order breaking the tie.

        Args:
            previous: The latest committed entry for the profile, or None
                if this is the first entry.

        Returns:
            The RecognitionEntry to persist.
        """
        created_at = self.created_at
        entry_hash = self.entry_hash
        if previous is not None and previous.created_at > created_at:
            created_at = previous.created_at
            entry_hash = compute_entry_hash(
                self.profile_id,
                self.recognizer_id,
                self.recognition_type.value,
                created_at,
            )
        return RecognitionEntry(
            entry_id=self.entry_id,
            profile_id=self.profile_id,
            recognizer_id=self.recognizer_id,
            recognition_type=self.recognition_type,
            base_weight=self.base_weight,
            recognizer_role=self.recognizer_role,
            entry_hash=entry_hash,
            previous_entry_hash=previous.entry_hash if previous else None,
            created_at=created_at,
            relationship=self.relationship,
            notes=self.notes,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
        )


@dataclass(frozen=True, eq=True)
class RecognitionEntry(DeletePreventionMixin):
    """Append-only recognition ledger entry.

    Entries are never updated or deleted. ``delete()`` raises
    ImmutableEntryError before any storage interaction.

    Attributes:
        entry_id: Unique identifier for the entry.
        profile_id: Profile being recognized.
        recognizer_id: User giving the recognition.
        recognition_type: Kind of attestation.
        base_weight: role weight x type multiplier at write time.
        recognizer_role: Snapshot of the recognizer's role at write time.
        entry_hash: SHA-256 over profile, recognizer, type and created_at.
        previous_entry_hash: entry_hash of the preceding entry for the same
            profile, or None for the first entry.
        created_at: Write timestamp (UTC, millisecond precision).
        relationship: Optional free-text relationship.
        notes: Optional free-text notes.
        ip_address: Request IP address for audit.
        user_agent: Request User-Agent for audit.
    """

    entry_id: UUID
    profile_id: UUID
    recognizer_id: UUID
    recognition_type: RecognitionType
    base_weight: float
    recognizer_role: str
    entry_hash: str
    previous_entry_hash: str | None
    created_at: datetime
    relationship: str | None = field(default=None)
    notes: str | None = field(default=None)
    ip_address: str | None = field(default=None)
    user_agent: str | None = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.recognition_type, RecognitionType):
            object.__setattr__(
                self, "recognition_type", RecognitionType(self.recognition_type)
            )
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (UTC)")

    @property
    def triple(self) -> tuple[UUID, UUID, RecognitionType]:
        """The (profile, recognizer, type) key that must be unique."""
        return (self.profile_id, self.recognizer_id, self.recognition_type)

    def verify_entry_hash(self) -> bool:
        """Recompute the entry hash and compare with the stored value.

        Returns:
            True if entry_hash matches the entry's own fields.
        """
        expected = compute_entry_hash(
            self.profile_id,
            self.recognizer_id,
            self.recognition_type.value,
            self.created_at,
        )
        return self.entry_hash == expected

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary.

        Returns:
            Dictionary representation with string UUIDs and ISO timestamps.
        """
        return {
            "entry_id": str(self.entry_id),
            "profile_id": str(self.profile_id),
            "recognizer_id": str(self.recognizer_id),
            "recognition_type": self.recognition_type.value,
            "relationship": self.relationship,
            "notes": self.notes,
            "base_weight": self.base_weight,
            "recognizer_role": self.recognizer_role,
            "entry_hash": self.entry_hash,
            "previous_entry_hash": self.previous_entry_hash,
            "created_at": self.created_at.isoformat(),
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RecognitionEntry:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If field values are invalid.
        """
        return cls(
            entry_id=UUID(data["entry_id"]),
            profile_id=UUID(data["profile_id"]),
            recognizer_id=UUID(data["recognizer_id"]),
            recognition_type=RecognitionType(data["recognition_type"]),
            base_weight=float(data["base_weight"]),
            recognizer_role=data["recognizer_role"],
            entry_hash=data["entry_hash"],
            previous_entry_hash=data.get("previous_entry_hash"),
            created_at=datetime.fromisoformat(data["created_at"]),
            relationship=data.get("relationship"),
            notes=data.get("notes"),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
        )


@dataclass(frozen=True)
class RecognitionAggregate:
    """Point-in-time recognition snapshot for a profile.

    Stored denormalized on the profile record; always rebuilt from the
    ledger, never edited directly.

    Attributes:
        score: Non-negative score rounded to one decimal place.
        level: Level derived from the unrounded total.
        recognizer_count: Number of distinct recognizers.
        last_recognition_at: created_at of the most recent entry.
    """

    score: float
    level: RecognitionLevel
    recognizer_count: int
    last_recognition_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"score must be non-negative, got {self.score}")
        if self.recognizer_count < 0:
            raise ValueError(
                f"recognizer_count must be non-negative, got {self.recognizer_count}"
            )

    @classmethod
    def empty(cls) -> RecognitionAggregate:
        """Zero defaults a new profile starts with."""
        return cls(score=0.0, level=RecognitionLevel.NEW, recognizer_count=0)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "recognizer_count": self.recognizer_count,
            "last_recognition_at": (
                self.last_recognition_at.isoformat()
                if self.last_recognition_at
                else None
            ),
        }


@dataclass(frozen=True)
class RecognitionView:
    """Read projection of a ledger entry with the recognizer resolved."""

    entry_id: UUID
    recognition_type: RecognitionType
    relationship: str | None
    notes: str | None
    base_weight: float
    recognizer_name: str
    recognizer_role: str
    created_at: datetime


@dataclass(frozen=True)
class RecognitionResult:
    """Outcome of a successful add-recognition call.

    Attributes:
        entry: The persisted ledger entry.
        aggregate: The profile's recomputed recognition snapshot.
    """

    entry: RecognitionEntry
    aggregate: RecognitionAggregate


@dataclass(frozen=True)
class RecognitionSummary:
    """Recognitions (newest first) together with the current aggregate."""

    recognitions: list[RecognitionView]
    aggregate: RecognitionAggregate
