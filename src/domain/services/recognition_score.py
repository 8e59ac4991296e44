"""Recognition score calculator.

Pure functions that turn a profile's ledger entries into a
RecognitionAggregate. This is the only place a score is computed; the
write path, the read path and the snapshot refresh all call
``compute_recognition_score``.

Each entry contributes its write-time ``base_weight`` decayed by age:

    decay_factor = 0.5 ** (age_weeks / half_life_weeks)
    decayed = max(base_weight * decay_factor, base_weight * decay_floor)

The score is the sum of decayed weights rounded to one decimal place. The
level is taken from the unrounded sum, so a total of 49.96 reports a score
of 50.0 at level moderate.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from src.config.recognition_config import (
    DEFAULT_RECOGNITION_WEIGHT_CONFIG,
    RecognitionWeightConfig,
)
from src.domain.models.recognition import (
    RecognitionAggregate,
    RecognitionEntry,
    RecognitionLevel,
)

_ONE_WEEK = timedelta(weeks=1)


def age_in_weeks(created_at: datetime, now: datetime) -> float:
    """Fractional weeks between ``created_at`` and ``now``.

    Entries stamped in the future (clock skew) count as age zero.
    """
    return max((now - created_at) / _ONE_WEEK, 0.0)


def decayed_weight(
    entry: RecognitionEntry,
    now: datetime,
    config: RecognitionWeightConfig = DEFAULT_RECOGNITION_WEIGHT_CONFIG,
) -> float:
    """Weight an entry still carries at ``now``.

    Args:
        entry: Ledger entry with its write-time base weight.
        now: Evaluation time.
        config: Weight table supplying half-life and floor.

    Returns:
        Decayed weight, never below ``base_weight * decay_floor``.
    """
    decay_factor = 0.5 ** (age_in_weeks(entry.created_at, now) / config.half_life_weeks)
    return max(
        entry.base_weight * decay_factor,
        entry.base_weight * config.decay_floor,
    )


def level_for_score(
    score: float,
    config: RecognitionWeightConfig = DEFAULT_RECOGNITION_WEIGHT_CONFIG,
) -> RecognitionLevel:
    """Map a score to its level using half-open threshold ranges."""
    for threshold in config.level_thresholds:
        if threshold.contains(score):
            return RecognitionLevel(threshold.level)
    return RecognitionLevel.NEW


def compute_recognition_score(
    entries: Iterable[RecognitionEntry],
    now: datetime,
    config: RecognitionWeightConfig = DEFAULT_RECOGNITION_WEIGHT_CONFIG,
) -> RecognitionAggregate:
    """Compute the recognition aggregate for one profile's entries.

    Args:
        entries: All ledger entries of the profile, in any order.
        now: Evaluation time (from the time authority).
        config: Weight table.

    Returns:
        RecognitionAggregate with score, level, distinct recognizer count
        and time of the most recent entry.
    """
    entries = list(entries)
    if not entries:
        return RecognitionAggregate.empty()

    total = sum(decayed_weight(entry, now, config) for entry in entries)

    # Level comes from the unrounded total; only the reported score is rounded
    return RecognitionAggregate(
        score=round(total, 1),
        level=level_for_score(total, config),
        recognizer_count=len({entry.recognizer_id for entry in entries}),
        last_recognition_at=max(entry.created_at for entry in entries),
    )
