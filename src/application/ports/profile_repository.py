"""Profile repository port.

The recognition engine reads profiles (existence, lifecycle state and the
fraud-risk inputs) and writes exactly one thing back: the denormalized
recognition snapshot.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.profile import ProfileRecord
from src.domain.models.recognition import RecognitionAggregate


class ProfileRepositoryProtocol(Protocol):
    """Protocol for profile storage adapters.

    Methods:
        get: Fetch a profile by ID
        update_recognition: Overwrite the cached recognition snapshot
    """

    async def get(self, profile_id: UUID) -> ProfileRecord | None:
        """Fetch a profile.

        Returns:
            The ProfileRecord, or None if it does not exist.
        """
        ...

    async def update_recognition(
        self, profile_id: UUID, aggregate: RecognitionAggregate
    ) -> None:
        """Overwrite the profile's recognition snapshot.

        Args:
            profile_id: Profile to update.
            aggregate: Freshly computed aggregate.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
        """
        ...
