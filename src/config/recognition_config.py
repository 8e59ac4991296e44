"""Recognition weight configuration.

This module defines the weight table used by the recognition engine:
role weights, recognition type multipliers, level thresholds and decay
parameters. The table is policy, not a correctness gate: unknown roles
and types fall back to a weight of 1.

The configuration is built once at process start and injected into the
services that need it. It is never mutated at runtime.

Environment Variables:
- RECOGNITION_HALF_LIFE_WEEKS: Weeks for a recognition to lose half its
  weight (default: 52)
- RECOGNITION_DECAY_FLOOR: Fraction of base weight always retained
  (default: 0.1)
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Weight applied when a role or type is missing from the table
DEFAULT_WEIGHT: float = 1.0

_DEFAULT_ROLE_WEIGHTS: dict[str, float] = {
    "admin": 10.0,
    "moderator": 8.0,
    "matchmaker": 6.0,
    "elder": 8.0,
    "helper": 5.0,
    "contributor": 2.0,
}

_DEFAULT_TYPE_MULTIPLIERS: dict[str, float] = {
    "know_personally": 1.5,
    "know_family": 1.3,
    "verified_documents": 1.2,
    "community_reference": 1.0,
}


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class LevelThreshold:
    """Half-open score range ``[min_score, max_score)`` for one level.

    Attributes:
        level: Level name (new, low, moderate, high).
        min_score: Inclusive lower bound.
        max_score: Exclusive upper bound (``math.inf`` for the top range).
    """

    level: str
    min_score: float
    max_score: float

    def contains(self, score: float) -> bool:
        """Check whether a score falls inside this range."""
        return self.min_score <= score < self.max_score


_DEFAULT_LEVEL_THRESHOLDS: tuple[LevelThreshold, ...] = (
    LevelThreshold(level="new", min_score=0.0, max_score=5.0),
    LevelThreshold(level="low", min_score=5.0, max_score=20.0),
    LevelThreshold(level="moderate", min_score=20.0, max_score=50.0),
    LevelThreshold(level="high", min_score=50.0, max_score=math.inf),
)


@dataclass(frozen=True)
class RecognitionWeightConfig:
    """Immutable weight table for recognition scoring.

    Attributes:
        role_weights: Base weight per recognizer role.
        type_multipliers: Multiplier per recognition type.
        level_thresholds: Ordered score ranges; the last range is open-ended.
        half_life_weeks: Weeks after which an entry keeps half its weight.
        decay_floor: Minimum fraction of base weight retained regardless
            of age.
    """

    role_weights: Mapping[str, float] = field(
        default_factory=lambda: dict(_DEFAULT_ROLE_WEIGHTS)
    )
    type_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(_DEFAULT_TYPE_MULTIPLIERS)
    )
    level_thresholds: tuple[LevelThreshold, ...] = _DEFAULT_LEVEL_THRESHOLDS
    half_life_weeks: float = 52.0
    decay_floor: float = 0.1

    def __post_init__(self) -> None:
        """Validate configuration values and freeze the mappings."""
        if self.half_life_weeks <= 0:
            raise ValueError(
                f"half_life_weeks must be positive, got {self.half_life_weeks}"
            )
        if not 0.0 <= self.decay_floor <= 1.0:
            raise ValueError(
                f"decay_floor must be between 0 and 1, got {self.decay_floor}"
            )
        for name, weight in {**self.role_weights, **self.type_multipliers}.items():
            if weight < 0:
                raise ValueError(f"weight for {name!r} must be non-negative")
        if not self.level_thresholds:
            raise ValueError("level_thresholds must not be empty")
        for previous, current in zip(self.level_thresholds, self.level_thresholds[1:]):
            if current.min_score != previous.max_score:
                raise ValueError(
                    f"level range {current.level!r} must start where "
                    f"{previous.level!r} ends ({previous.max_score})"
                )

        object.__setattr__(
            self, "role_weights", MappingProxyType(dict(self.role_weights))
        )
        object.__setattr__(
            self, "type_multipliers", MappingProxyType(dict(self.type_multipliers))
        )
        object.__setattr__(self, "level_thresholds", tuple(self.level_thresholds))

    def role_weight(self, role: str) -> float:
        """Weight for a recognizer role, 1 when the role is unmapped."""
        return self.role_weights.get(role, DEFAULT_WEIGHT)

    def type_multiplier(self, recognition_type: str) -> float:
        """Multiplier for a recognition type, 1 when the type is unmapped."""
        return self.type_multipliers.get(recognition_type, DEFAULT_WEIGHT)

    def is_role_mapped(self, role: str) -> bool:
        return role in self.role_weights

    def is_type_mapped(self, recognition_type: str) -> bool:
        return recognition_type in self.type_multipliers

    @classmethod
    def from_environment(cls) -> "RecognitionWeightConfig":
        """Create config from environment variables with defaults.

        Environment Variables:
            RECOGNITION_HALF_LIFE_WEEKS: Half-life in weeks (default: 52)
            RECOGNITION_DECAY_FLOOR: Retained fraction (default: 0.1)

        Returns:
            RecognitionWeightConfig with decay values from environment.
        """
        return cls(
            half_life_weeks=_get_float_env("RECOGNITION_HALF_LIFE_WEEKS", 52.0),
            decay_floor=_get_float_env("RECOGNITION_DECAY_FLOOR", 0.1),
        )


# Default production config
DEFAULT_RECOGNITION_WEIGHT_CONFIG = RecognitionWeightConfig()

# Testing config with a short half-life so decay is visible in days
TEST_RECOGNITION_WEIGHT_CONFIG = RecognitionWeightConfig(
    half_life_weeks=1.0,
    decay_floor=0.1,
)
