"""Hash utilities for the recognition ledger chain.

Every ledger entry carries an ``entry_hash`` computed from its identifying
fields and write timestamp, plus the ``entry_hash`` of the entry written
before it for the same profile. Together they make the per-profile ledger
tamper-evident: edits or deletions show up as broken links when the chain
is walked.

The hash input is the pipe-joined string::

    {profile_id}|{recognizer_id}|{recognition_type}|{timestamp_ms}

where ``timestamp_ms`` is milliseconds since the Unix epoch. The same
instant is stored as the entry's ``created_at``, so the timestamp must be
captured once and reused for both.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from uuid import UUID

HASH_ALG_NAME: str = "SHA-256"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def truncate_to_milliseconds(moment: datetime) -> datetime:
    """Drop sub-millisecond precision so storage and hash agree.

    Args:
        moment: Timezone-aware datetime.

    Returns:
        The same instant with microseconds truncated to whole milliseconds.

    Raises:
        ValueError: If the datetime is naive.
    """
    if moment.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware (UTC)")
    return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)


def to_epoch_milliseconds(moment: datetime) -> int:
    """Convert a timezone-aware datetime to integer epoch milliseconds.

    Uses timedelta floor division rather than ``timestamp()`` so the
    result is exact and does not depend on float rounding.
    """
    if moment.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware (UTC)")
    return (moment - _EPOCH) // _ONE_MILLISECOND


def entry_hash_input(
    profile_id: UUID,
    recognizer_id: UUID,
    recognition_type: str,
    created_at: datetime,
) -> str:
    """Build the canonical string that is hashed for an entry."""
    return (
        f"{profile_id}|{recognizer_id}|{recognition_type}|"
        f"{to_epoch_milliseconds(created_at)}"
    )


def compute_entry_hash(
    profile_id: UUID,
    recognizer_id: UUID,
    recognition_type: str,
    created_at: datetime,
) -> str:
    """Compute the SHA-256 entry hash.

    Args:
        profile_id: Profile being recognized.
        recognizer_id: User giving the recognition.
        recognition_type: Recognition type value (e.g. "know_family").
        created_at: Write timestamp (millisecond precision).

    Returns:
        Lowercase hexadecimal SHA-256 digest (64 characters).

    Example:
        >>> from uuid import UUID
        >>> len(compute_entry_hash(
        ...     UUID(int=1), UUID(int=2), "know_family",
        ...     datetime(2026, 1, 1, tzinfo=timezone.utc),
        ... ))
        64
    """
    data = entry_hash_input(profile_id, recognizer_id, recognition_type, created_at)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def is_valid_sha256_hex(value: str) -> bool:
    """Check if a string is a 64-character lowercase hexadecimal digest."""
    if len(value) != 64:
        return False
    try:
        int(value, 16)
    except ValueError:
        return False
    return value == value.lower()
