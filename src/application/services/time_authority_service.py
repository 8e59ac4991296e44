"""Time Authority Service - the production clock.

This is the single place in production code that reads the system clock.
Everything else receives a TimeAuthorityProtocol and asks it for time.

All wall-clock values are timezone-aware UTC. The ledger truncates them to
milliseconds before hashing; that is the ledger's concern, not the clock's.
"""

import time
from datetime import datetime, timezone

from src.application.ports.time_authority import TimeAuthorityProtocol


class TimeAuthorityService(TimeAuthorityProtocol):
    """System clock implementation of TimeAuthorityProtocol.

    Example:
        >>> clock = TimeAuthorityService()
        >>> clock.utcnow().tzinfo is not None
        True
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
