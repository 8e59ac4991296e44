"""In-memory stub for RecognizerDirectoryProtocol.

Seed recognizers with ``add_recognizer`` before exercising the service.
Unknown IDs resolve to None, as a missing user row would.
"""

from __future__ import annotations

from uuid import UUID

from src.application.ports.recognizer_directory import RecognizerRecord


class RecognizerDirectoryStub:
    """In-memory stub implementation of RecognizerDirectoryProtocol."""

    def __init__(self) -> None:
        self._recognizers: dict[UUID, RecognizerRecord] = {}

    async def get_recognizer(self, recognizer_id: UUID) -> RecognizerRecord | None:
        return self._recognizers.get(recognizer_id)

    # Test helper methods

    def add_recognizer(self, recognizer: RecognizerRecord) -> None:
        """Add or replace a recognizer."""
        self._recognizers[recognizer.recognizer_id] = recognizer

    def remove_recognizer(self, recognizer_id: UUID) -> None:
        """Remove a recognizer, simulating a deleted account."""
        self._recognizers.pop(recognizer_id, None)

    def reset(self) -> None:
        self._recognizers.clear()


# Singleton instance for dependency injection
_recognizer_directory_stub: RecognizerDirectoryStub | None = None


def get_recognizer_directory_stub() -> RecognizerDirectoryStub:
    """Get the singleton recognizer directory stub."""
    global _recognizer_directory_stub
    if _recognizer_directory_stub is None:
        _recognizer_directory_stub = RecognizerDirectoryStub()
    return _recognizer_directory_stub


def reset_recognizer_directory_stub() -> None:
    global _recognizer_directory_stub
    _recognizer_directory_stub = RecognizerDirectoryStub()
