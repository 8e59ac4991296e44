"""Recognizer directory port.

This module defines the port for looking up the accounts that give
recognitions:
- RecognizerRecord: Identity, display name, role and verification flag
- RecognizerDirectoryProtocol: Protocol for user store adapters

Only verified accounts may recognize a profile. The role is looked up at
write time and snapshotted on the ledger entry, so later role changes do
not alter past weights.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class RecognizerRecord:
    """A platform user as seen by the recognition engine.

    Attributes:
        recognizer_id: User identifier.
        name: Display name shown next to recognitions.
        role: Platform role (admin, moderator, matchmaker, elder, helper,
            contributor). Unknown roles are accepted and weighted 1.
        is_verified: Whether the account passed vetting.
    """

    recognizer_id: UUID
    name: str
    role: str
    is_verified: bool = False


class RecognizerDirectoryProtocol(Protocol):
    """Protocol for recognizer lookup adapters.

    Methods:
        get_recognizer: Fetch a recognizer by ID
    """

    async def get_recognizer(self, recognizer_id: UUID) -> RecognizerRecord | None:
        """Fetch a recognizer.

        Args:
            recognizer_id: The user ID.

        Returns:
            The RecognizerRecord, or None if no such user exists.
        """
        ...
