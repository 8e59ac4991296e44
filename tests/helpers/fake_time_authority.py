"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Recognition scores decay over weeks, so tests need to move the clock by
large steps without sleeping.

Usage:
    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    >>> fake_time.advance(weeks=52)
    >>> fake_time.now()
    datetime.datetime(2026, 12, 31, 0, 0, tzinfo=datetime.timezone.utc)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_TEST_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Time authority whose clock only moves when the test moves it.

    The monotonic clock advances together with wall time on ``advance()``
    but is unaffected by ``set_time()``.
    """

    def __init__(
        self,
        frozen_at: datetime | None = None,
        *,
        start_monotonic: float = 0.0,
    ) -> None:
        frozen_at = frozen_at or DEFAULT_TEST_TIME
        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)
        self._current_time = frozen_at
        self._monotonic = start_monotonic

    def now(self) -> datetime:
        return self._current_time

    def utcnow(self) -> datetime:
        return self._current_time

    def monotonic(self) -> float:
        return self._monotonic

    def advance(
        self,
        delta: timedelta | None = None,
        *,
        weeks: float = 0,
        days: float = 0,
        seconds: float = 0,
        milliseconds: float = 0,
    ) -> None:
        """Move the clock forward.

        Raises:
            ValueError: If the total step is negative.
        """
        step = (delta or timedelta()) + timedelta(
            weeks=weeks, days=days, seconds=seconds, milliseconds=milliseconds
        )
        if step < timedelta():
            raise ValueError(
                f"Cannot advance time backwards ({step}). Use set_time() instead."
            )
        self._current_time += step
        self._monotonic += step.total_seconds()

    def set_time(self, dt: datetime) -> None:
        """Jump to an explicit time without touching the monotonic clock."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        self._current_time = dt

    def __repr__(self) -> str:
        return (
            f"FakeTimeAuthority(current_time={self._current_time.isoformat()}, "
            f"monotonic={self._monotonic:.3f})"
        )
