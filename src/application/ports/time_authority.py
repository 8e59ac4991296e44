"""Time authority port.

Every timestamp the engine writes or evaluates against comes from an
injected TimeAuthorityProtocol: entry ``created_at`` values (which are also
hashed), decay ages and fraud-risk listing ages. Production code never
calls ``datetime.now()`` directly.

For production use TimeAuthorityService from src/application/services/.
For tests use FakeTimeAuthority from tests/helpers/fake_time_authority.py.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract source of the current time.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.utcnow()
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time, timezone-aware (UTC)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return the current UTC time.

        Returns:
            Timezone-aware datetime in UTC.
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic clock value in seconds.

        Only differences between values are meaningful. Used for measuring
        operation durations in logs, never for timestamps.
        """
        ...
