"""Profile record as seen by the recognition engine.

Only the fields the engine reads or writes are modelled here. The profile
itself is owned by the wider platform; the engine writes nothing but the
denormalized ``recognition`` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from src.domain.models.recognition import RecognitionAggregate


class ProfileStatus(str, Enum):
    """Lifecycle state of a profile."""

    ACTIVE = "active"
    MATCHED = "matched"
    WITHDRAWN = "withdrawn"
    DELETED = "deleted"


@dataclass(frozen=True)
class ProfileRecord:
    """Profile fields used for recognition and fraud risk.

    Attributes:
        profile_id: Unique profile identifier.
        full_name: Display name of the candidate.
        status: Lifecycle state; deleted profiles cannot be recognized.
        recognition: Cached aggregate, rebuilt from the ledger.
        first_seen_at: When the profile was first listed.
        phone_reused: Whether the contact phone appears on other profiles.
        flag_count: Number of manual flags raised against the profile.
        photo_count: Number of photos attached.
        completeness: Fraction of profile fields filled in (0.0 - 1.0).
    """

    profile_id: UUID
    full_name: str
    first_seen_at: datetime
    status: ProfileStatus = ProfileStatus.ACTIVE
    recognition: RecognitionAggregate = field(
        default_factory=RecognitionAggregate.empty
    )
    phone_reused: bool = False
    flag_count: int = 0
    photo_count: int = 0
    completeness: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.status, ProfileStatus):
            object.__setattr__(self, "status", ProfileStatus(self.status))
        if self.first_seen_at.tzinfo is None:
            raise ValueError("first_seen_at must be timezone-aware (UTC)")
        if self.flag_count < 0:
            raise ValueError(f"flag_count must be non-negative, got {self.flag_count}")
        if self.photo_count < 0:
            raise ValueError(
                f"photo_count must be non-negative, got {self.photo_count}"
            )
        if not 0.0 <= self.completeness <= 1.0:
            raise ValueError(
                f"completeness must be between 0 and 1, got {self.completeness}"
            )

    @property
    def is_deleted(self) -> bool:
        return self.status == ProfileStatus.DELETED

    def with_recognition(self, aggregate: RecognitionAggregate) -> ProfileRecord:
        """Return a copy carrying a new recognition snapshot."""
        return replace(self, recognition=aggregate)
