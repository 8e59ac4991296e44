"""Unit tests for recognition entry hashing."""

import hashlib
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from src.domain.services.recognition_hashing import (
    compute_entry_hash,
    entry_hash_input,
    is_valid_sha256_hex,
    to_epoch_milliseconds,
    truncate_to_milliseconds,
)

PROFILE = UUID("11111111-1111-1111-1111-111111111111")
RECOGNIZER = UUID("22222222-2222-2222-2222-222222222222")


def test_hash_input_format() -> None:
    created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert entry_hash_input(PROFILE, RECOGNIZER, "know_family", created_at) == (
        "11111111-1111-1111-1111-111111111111|"
        "22222222-2222-2222-2222-222222222222|"
        "know_family|1767225600000"
    )


def test_hash_is_sha256_of_input() -> None:
    created_at = datetime(2026, 1, 1, 12, 30, 15, 123000, tzinfo=timezone.utc)
    expected = hashlib.sha256(
        entry_hash_input(PROFILE, RECOGNIZER, "know_family", created_at).encode()
    ).hexdigest()
    assert compute_entry_hash(PROFILE, RECOGNIZER, "know_family", created_at) == expected


def test_hash_changes_with_every_field() -> None:
    created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    base = compute_entry_hash(PROFILE, RECOGNIZER, "know_family", created_at)
    assert base != compute_entry_hash(RECOGNIZER, PROFILE, "know_family", created_at)
    assert base != compute_entry_hash(PROFILE, RECOGNIZER, "know_personally", created_at)
    assert base != compute_entry_hash(
        PROFILE, RECOGNIZER, "know_family", created_at + timedelta(milliseconds=1)
    )


def test_sub_millisecond_precision_is_not_hashed() -> None:
    a = datetime(2026, 1, 1, 0, 0, 0, 5000, tzinfo=timezone.utc)
    b = datetime(2026, 1, 1, 0, 0, 0, 5999, tzinfo=timezone.utc)
    assert to_epoch_milliseconds(a) == to_epoch_milliseconds(b)


def test_truncate_to_milliseconds() -> None:
    moment = datetime(2026, 3, 4, 5, 6, 7, 891234, tzinfo=timezone.utc)
    assert truncate_to_milliseconds(moment).microsecond == 891000


def test_non_utc_offsets_hash_the_same_instant() -> None:
    utc = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    ist = utc.astimezone(timezone(timedelta(hours=5, minutes=30)))
    assert to_epoch_milliseconds(utc) == to_epoch_milliseconds(ist)


def test_naive_datetimes_are_rejected() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        truncate_to_milliseconds(datetime(2026, 1, 1))
    with pytest.raises(ValueError, match="timezone-aware"):
        to_epoch_milliseconds(datetime(2026, 1, 1))


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("a" * 64, True),
        ("A" * 64, False),
        ("a" * 63, False),
        ("g" * 64, False),
    ],
)
def test_is_valid_sha256_hex(value: str, valid: bool) -> None:
    assert is_valid_sha256_hex(value) is valid
