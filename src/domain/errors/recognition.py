"""Recognition domain errors.

This module provides exception classes for recognition submission failures.
Each error maps to one caller-facing failure mode and carries a
human-readable reason that is safe to return verbatim.

Error categories:
- NotFoundError (404): recognizer or profile does not exist
- ForbiddenError (403): recognizer is not verified
- ConflictError (409): duplicate recognition or deleted profile

None of these are retried automatically. Chain integrity breaks are NOT
errors: the chain verifier reports them as results.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from src.domain.exceptions import RecognitionEngineError


class RecognitionError(RecognitionEngineError):
    """Base error for caller-facing recognition failures.

    Subclasses set ``status_code``, ``error_type`` and ``title`` and
    pass the human-readable reason as the message.
    """

    status_code: int = 400
    error_type: str = "urn:pehchan:recognition:error"
    title: str = "Recognition Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def _extensions(self) -> dict:
        return {}

    def to_rfc7807_dict(self) -> dict:
        """Serialize to RFC 7807 problem details format.

        Returns:
            Dictionary with type, title, status, detail and
            error-specific extension members.
        """
        result: dict = {
            "type": self.error_type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.message,
        }
        result.update(self._extensions())
        return result


class NotFoundError(RecognitionError):
    """A referenced recognizer or profile does not exist.

    HTTP Status: 404 Not Found
    """

    status_code = 404
    error_type = "urn:pehchan:recognition:not-found"
    title = "Not Found"


class ForbiddenError(RecognitionError):
    """The caller is not allowed to perform the action.

    HTTP Status: 403 Forbidden
    """

    status_code = 403
    error_type = "urn:pehchan:recognition:forbidden"
    title = "Forbidden"


class ConflictError(RecognitionError):
    """The action conflicts with existing state.

    HTTP Status: 409 Conflict
    """

    status_code = 409
    error_type = "urn:pehchan:recognition:conflict"
    title = "Conflict"


class RecognizerNotFoundError(NotFoundError):
    """Raised when the recognizer account does not exist.

    Attributes:
        recognizer_id: The recognizer ID that was not found.
    """

    error_type = "urn:pehchan:recognition:recognizer-not-found"
    title = "Recognizer Not Found"

    def __init__(self, recognizer_id: UUID) -> None:
        self.recognizer_id = recognizer_id
        super().__init__("Recognizer not found")

    def _extensions(self) -> dict:
        return {"recognizer_id": str(self.recognizer_id)}


class ProfileNotFoundError(NotFoundError):
    """Raised when the target profile does not exist.

    Attributes:
        profile_id: The profile ID that was not found.
    """

    error_type = "urn:pehchan:recognition:profile-not-found"
    title = "Profile Not Found"

    def __init__(self, profile_id: UUID) -> None:
        self.profile_id = profile_id
        super().__init__("Profile not found")

    def _extensions(self) -> dict:
        return {"profile_id": str(self.profile_id)}


class UnverifiedRecognizerError(ForbiddenError):
    """Raised when an unverified account tries to recognize a profile.

    Only vetted accounts can attest; this is the primary anti-abuse gate.
    The caller must not retry until the account becomes verified.

    Attributes:
        recognizer_id: The unverified recognizer.
    """

    error_type = "urn:pehchan:recognition:unverified-recognizer"
    title = "Unverified Recognizer"

    def __init__(self, recognizer_id: UUID) -> None:
        self.recognizer_id = recognizer_id
        super().__init__("Only verified users can recognise profiles")

    def _extensions(self) -> dict:
        return {"recognizer_id": str(self.recognizer_id)}


class DeletedProfileError(ConflictError):
    """Raised when the target profile is in the deleted lifecycle state.

    Attributes:
        profile_id: The deleted profile.
    """

    error_type = "urn:pehchan:recognition:deleted-profile"
    title = "Deleted Profile"

    def __init__(self, profile_id: UUID) -> None:
        self.profile_id = profile_id
        super().__init__("Cannot recognise a deleted profile")

    def _extensions(self) -> dict:
        return {"profile_id": str(self.profile_id)}


class DuplicateRecognitionError(ConflictError):
    """Raised when the (profile, recognizer, type) triple already exists.

    Raised both by the service pre-check and by the ledger's uniqueness
    constraint when a concurrent request wins the race.

    Attributes:
        profile_id: The recognized profile.
        recognizer_id: The recognizer attempting the duplicate.
        recognition_type: The recognition type value.
        existing_entry_id: ID of the existing entry (if available).
        existing_created_at: When the existing entry was written (if available).
    """

    error_type = "urn:pehchan:recognition:duplicate"
    title = "Duplicate Recognition"

    def __init__(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: str,
        existing_entry_id: UUID | None = None,
        existing_created_at: datetime | None = None,
    ) -> None:
        self.profile_id = profile_id
        self.recognizer_id = recognizer_id
        self.recognition_type = recognition_type
        self.existing_entry_id = existing_entry_id
        self.existing_created_at = existing_created_at
        super().__init__(
            "You have already provided this type of recognition for this profile"
        )

    def _extensions(self) -> dict:
        result: dict = {
            "profile_id": str(self.profile_id),
            "recognizer_id": str(self.recognizer_id),
            "recognition_type": self.recognition_type,
        }
        if self.existing_entry_id is not None:
            result["existing_entry_id"] = str(self.existing_entry_id)
        if self.existing_created_at is not None:
            result["existing_created_at"] = self.existing_created_at.isoformat()
        return result


class ImmutableEntryError(RecognitionEngineError):
    """Raised on any attempt to delete or rewrite a ledger entry."""

    pass
