"""Unit tests for recognition error types and their RFC 7807 form."""

from uuid import uuid4

from src.domain.errors import (
    DeletedProfileError,
    DuplicateRecognitionError,
    LedgerStoreError,
    LedgerStoreUnavailableError,
    ProfileNotFoundError,
    RecognitionError,
    RecognitionScoreRecomputeError,
    RecognizerNotFoundError,
    UnverifiedRecognizerError,
)
from src.domain.exceptions import RecognitionEngineError
from tests.helpers.builders import T0


class TestStatusCodes:
    def test_not_found_errors(self) -> None:
        assert RecognizerNotFoundError(uuid4()).status_code == 404
        assert ProfileNotFoundError(uuid4()).status_code == 404

    def test_unverified_is_forbidden(self) -> None:
        error = UnverifiedRecognizerError(uuid4())
        assert error.status_code == 403
        assert error.message == "Only verified users can recognise profiles"

    def test_conflicts(self) -> None:
        assert DeletedProfileError(uuid4()).status_code == 409
        duplicate = DuplicateRecognitionError(uuid4(), uuid4(), "know_family")
        assert duplicate.status_code == 409


class TestRfc7807:
    def test_profile_not_found(self) -> None:
        profile_id = uuid4()
        assert ProfileNotFoundError(profile_id).to_rfc7807_dict() == {
            "type": "urn:pehchan:recognition:profile-not-found",
            "title": "Profile Not Found",
            "status": 404,
            "detail": "Profile not found",
            "profile_id": str(profile_id),
        }

    def test_duplicate_includes_existing_entry(self) -> None:
        existing_id = uuid4()
        error = DuplicateRecognitionError(
            uuid4(),
            uuid4(),
            "know_family",
            existing_entry_id=existing_id,
            existing_created_at=T0,
        )
        problem = error.to_rfc7807_dict()
        assert problem["existing_entry_id"] == str(existing_id)
        assert problem["existing_created_at"] == T0.isoformat()
        assert problem["detail"] == (
            "You have already provided this type of recognition for this profile"
        )

    def test_duplicate_without_existing_entry(self) -> None:
        problem = DuplicateRecognitionError(uuid4(), uuid4(), "know_family").to_rfc7807_dict()
        assert "existing_entry_id" not in problem
        assert "existing_created_at" not in problem


class TestHierarchy:
    def test_all_errors_share_the_base(self) -> None:
        for error in (
            RecognizerNotFoundError(uuid4()),
            LedgerStoreUnavailableError("down"),
            RecognitionScoreRecomputeError(uuid4(), uuid4()),
        ):
            assert isinstance(error, RecognitionEngineError)

    def test_storage_errors_are_not_caller_errors(self) -> None:
        assert issubclass(LedgerStoreUnavailableError, LedgerStoreError)
        assert not issubclass(LedgerStoreError, RecognitionError)
        assert not issubclass(RecognitionScoreRecomputeError, RecognitionError)

    def test_recompute_error_names_entry(self) -> None:
        profile_id, entry_id = uuid4(), uuid4()
        error = RecognitionScoreRecomputeError(profile_id, entry_id)
        assert error.entry_id == entry_id
        assert str(entry_id) in str(error)
