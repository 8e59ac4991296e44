"""In-memory stub for ProfileRepositoryProtocol.

Stores ProfileRecord values and supports failure injection on the
snapshot write, so the recompute-failure path can be tested.
"""

from __future__ import annotations

from uuid import UUID

from src.domain.errors import LedgerStoreError, ProfileNotFoundError
from src.domain.models.profile import ProfileRecord
from src.domain.models.recognition import RecognitionAggregate


class ProfileRepositoryStub:
    """In-memory stub implementation of ProfileRepositoryProtocol."""

    def __init__(self) -> None:
        self._profiles: dict[UUID, ProfileRecord] = {}
        self._update_error: Exception | None = None
        self._update_count = 0

    async def get(self, profile_id: UUID) -> ProfileRecord | None:
        return self._profiles.get(profile_id)

    async def update_recognition(
        self, profile_id: UUID, aggregate: RecognitionAggregate
    ) -> None:
        """Overwrite the profile's recognition snapshot.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            LedgerStoreError: If a failure was injected.
        """
        if self._update_error is not None:
            raise self._update_error
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)
        self._profiles[profile_id] = profile.with_recognition(aggregate)
        self._update_count += 1

    # Test helper methods

    def add_profile(self, profile: ProfileRecord) -> None:
        """Add or replace a profile."""
        self._profiles[profile.profile_id] = profile

    def fail_updates(self, error: Exception | None = None) -> None:
        """Make every snapshot write raise ``error``."""
        self._update_error = error or LedgerStoreError("Injected update failure")

    def clear_failures(self) -> None:
        self._update_error = None

    @property
    def update_count(self) -> int:
        """Number of successful snapshot writes."""
        return self._update_count

    def reset(self) -> None:
        self._profiles.clear()
        self._update_error = None
        self._update_count = 0


# Singleton instance for dependency injection
_profile_repository_stub: ProfileRepositoryStub | None = None


def get_profile_repository_stub() -> ProfileRepositoryStub:
    """Get the singleton profile repository stub."""
    global _profile_repository_stub
    if _profile_repository_stub is None:
        _profile_repository_stub = ProfileRepositoryStub()
    return _profile_repository_stub


def reset_profile_repository_stub() -> None:
    global _profile_repository_stub
    _profile_repository_stub = ProfileRepositoryStub()
