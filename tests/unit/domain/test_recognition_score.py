"""Unit tests for the recognition score calculator."""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.config.recognition_config import RecognitionWeightConfig
from src.domain.models.recognition import RecognitionLevel, RecognitionType
from src.domain.services.recognition_score import (
    age_in_weeks,
    compute_recognition_score,
    decayed_weight,
    level_for_score,
)
from tests.helpers import make_entry
from tests.helpers.builders import T0


class TestDecay:
    def test_fresh_entry_keeps_full_weight(self) -> None:
        entry = make_entry(created_at=T0, base_weight=10.0)
        assert decayed_weight(entry, T0) == 10.0

    def test_one_half_life_halves_weight(self) -> None:
        entry = make_entry(created_at=T0, base_weight=10.0)
        assert decayed_weight(entry, T0 + timedelta(weeks=52)) == pytest.approx(5.0)

    def test_floor_applies_to_very_old_entries(self) -> None:
        entry = make_entry(created_at=T0, base_weight=10.0)
        # 0.5 ** 10 is well below the 0.1 floor
        assert decayed_weight(entry, T0 + timedelta(weeks=520)) == pytest.approx(1.0)

    def test_custom_half_life(self) -> None:
        config = RecognitionWeightConfig(half_life_weeks=26)
        entry = make_entry(created_at=T0, base_weight=8.0)
        assert decayed_weight(entry, T0 + timedelta(weeks=26), config) == pytest.approx(
            4.0
        )

    def test_future_entries_count_as_age_zero(self) -> None:
        assert age_in_weeks(T0 + timedelta(days=3), T0) == 0.0

    def test_age_is_fractional(self) -> None:
        assert age_in_weeks(T0, T0 + timedelta(days=3, hours=12)) == pytest.approx(0.5)


class TestLevels:
    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (0.0, RecognitionLevel.NEW),
            (4.9, RecognitionLevel.NEW),
            (5.0, RecognitionLevel.LOW),
            (19.9, RecognitionLevel.LOW),
            (20.0, RecognitionLevel.MODERATE),
            (49.99, RecognitionLevel.MODERATE),
            (50.0, RecognitionLevel.HIGH),
            (1000.0, RecognitionLevel.HIGH),
        ],
    )
    def test_threshold_boundaries(self, score: float, level: RecognitionLevel) -> None:
        assert level_for_score(score) == level


class TestComputeRecognitionScore:
    def test_no_entries_gives_empty_aggregate(self) -> None:
        aggregate = compute_recognition_score([], T0)
        assert aggregate.score == 0.0
        assert aggregate.level == RecognitionLevel.NEW
        assert aggregate.recognizer_count == 0
        assert aggregate.last_recognition_at is None

    def test_sums_and_rounds_to_one_decimal(self) -> None:
        profile_id = uuid4()
        entries = [
            make_entry(profile_id=profile_id, base_weight=10.4),
            make_entry(profile_id=profile_id, base_weight=15.0),
        ]
        aggregate = compute_recognition_score(entries, T0)
        assert aggregate.score == 25.4
        assert aggregate.level == RecognitionLevel.MODERATE

    @pytest.mark.parametrize(
        ("total", "score", "level"),
        [
            (4.96, 5.0, RecognitionLevel.NEW),
            (19.96, 20.0, RecognitionLevel.LOW),
            (49.96, 50.0, RecognitionLevel.MODERATE),
            (49.99, 50.0, RecognitionLevel.MODERATE),
        ],
    )
    def test_level_uses_unrounded_total(
        self, total: float, score: float, level: RecognitionLevel
    ) -> None:
        aggregate = compute_recognition_score([make_entry(base_weight=total)], T0)
        assert aggregate.score == score
        assert aggregate.level == level

    def test_counts_distinct_recognizers(self) -> None:
        profile_id = uuid4()
        recognizer_id = uuid4()
        entries = [
            make_entry(profile_id=profile_id, recognizer_id=recognizer_id),
            make_entry(
                profile_id=profile_id,
                recognizer_id=recognizer_id,
                recognition_type=RecognitionType.KNOW_FAMILY,
            ),
            make_entry(profile_id=profile_id),
        ]
        assert compute_recognition_score(entries, T0).recognizer_count == 2

    def test_last_recognition_at_is_newest_entry(self) -> None:
        profile_id = uuid4()
        newest = T0 + timedelta(days=10)
        entries = [
            make_entry(profile_id=profile_id, created_at=newest),
            make_entry(profile_id=profile_id, created_at=T0),
        ]
        aggregate = compute_recognition_score(entries, newest)
        assert aggregate.last_recognition_at == newest

    def test_order_of_entries_does_not_matter(self) -> None:
        profile_id = uuid4()
        entries = [
            make_entry(
                profile_id=profile_id,
                created_at=T0 + timedelta(weeks=i),
                base_weight=weight,
            )
            for i, weight in enumerate([10.0, 8.0, 6.0])
        ]
        now = T0 + timedelta(weeks=30)
        assert (
            compute_recognition_score(entries, now)
            == compute_recognition_score(list(reversed(entries)), now)
        )

    def test_score_decays_between_reads(self) -> None:
        entries = [make_entry(base_weight=15.0)]
        fresh = compute_recognition_score(entries, T0)
        later = compute_recognition_score(entries, T0 + timedelta(weeks=52))
        assert fresh.score == 15.0
        assert later.score == 7.5
        assert later.level == RecognitionLevel.LOW
