"""Fraud risk heuristics for profiles.

A profile's risk score is the sum of independent heuristic penalties,
capped at 100. Recognition feeds two of them: a profile nobody has
recognized, and a profile that has been listed for a month without
reaching the ``low`` recognition level.

The score is advisory. It surfaces profiles for moderator review and
never blocks any operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from src.domain.models.profile import ProfileRecord

MAX_RISK_SCORE: int = 100

NO_RECOGNITION_PENALTY: int = 20
STALE_LOW_RECOGNITION_PENALTY: int = 25
PHONE_REUSE_PENALTY: int = 30
FLAG_PENALTY: int = 10
MAX_FLAG_PENALTY: int = 30
NO_PHOTOS_PENALTY: int = 10
INCOMPLETE_PROFILE_PENALTY: int = 15

STALE_LISTING_AGE = timedelta(days=30)
LOW_RECOGNITION_SCORE: float = 5.0
MIN_COMPLETENESS: float = 0.6


class FraudRiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class FraudRiskAssessment:
    """Risk score with the reasons that contributed to it.

    Attributes:
        score: Capped risk score (0 - 100).
        level: low below 20, medium below 50, otherwise high.
        reasons: Human-readable reasons, in heuristic order.
    """

    score: int
    level: FraudRiskLevel
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "reasons": list(self.reasons),
        }


def risk_level_for_score(score: int) -> FraudRiskLevel:
    if score < 20:
        return FraudRiskLevel.LOW
    if score < 50:
        return FraudRiskLevel.MEDIUM
    return FraudRiskLevel.HIGH


def compute_fraud_risk(profile: ProfileRecord, now: datetime) -> FraudRiskAssessment:
    """Evaluate the fraud heuristics for one profile.

    Args:
        profile: Profile with its cached recognition snapshot.
        now: Evaluation time.

    Returns:
        FraudRiskAssessment with capped score and reasons.
    """
    score = 0
    reasons: list[str] = []

    if profile.recognition.recognizer_count == 0:
        score += NO_RECOGNITION_PENALTY
        reasons.append("No recognition from verified users")

    listed_for = now - profile.first_seen_at
    if (
        listed_for > STALE_LISTING_AGE
        and profile.recognition.score < LOW_RECOGNITION_SCORE
    ):
        score += STALE_LOW_RECOGNITION_PENALTY
        reasons.append("Low recognition despite being listed for 30+ days")

    if profile.phone_reused:
        score += PHONE_REUSE_PENALTY
        reasons.append("Phone number used in another profile")

    if profile.flag_count > 0:
        score += min(profile.flag_count * FLAG_PENALTY, MAX_FLAG_PENALTY)
        reasons.append(f"{profile.flag_count} manual flag(s) from users")

    if profile.photo_count == 0:
        score += NO_PHOTOS_PENALTY
        reasons.append("No photos uploaded")

    if profile.completeness < MIN_COMPLETENESS:
        score += INCOMPLETE_PROFILE_PENALTY
        reasons.append("Incomplete profile information")

    # Level follows the uncapped sum; equal to the capped one above 50.
    return FraudRiskAssessment(
        score=min(score, MAX_RISK_SCORE),
        level=risk_level_for_score(score),
        reasons=tuple(reasons),
    )
