"""
Pytest configuration and shared fixtures for recognition engine tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/ and run against in-memory stubs
- Integration tests go in tests/integration/ (marker: integration)
- Time comes from FakeTimeAuthority, never the system clock
"""

from datetime import datetime, timezone

import pytest

from src.application.ports.recognizer_directory import RecognizerRecord
from src.application.services.recognition_service import RecognitionService
from src.config.recognition_config import DEFAULT_RECOGNITION_WEIGHT_CONFIG
from src.infrastructure.stubs import (
    AuditLogStub,
    ProfileRepositoryStub,
    RecognitionLedgerStub,
    RecognizerDirectoryStub,
)
from tests.helpers import FakeTimeAuthority, make_profile, make_recognizer

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(frozen_at=T0)


@pytest.fixture
def ledger() -> RecognitionLedgerStub:
    return RecognitionLedgerStub()


@pytest.fixture
def recognizers() -> RecognizerDirectoryStub:
    return RecognizerDirectoryStub()


@pytest.fixture
def profiles() -> ProfileRepositoryStub:
    return ProfileRepositoryStub()


@pytest.fixture
def audit_log() -> AuditLogStub:
    return AuditLogStub()


@pytest.fixture
def recognition_service(
    ledger: RecognitionLedgerStub,
    recognizers: RecognizerDirectoryStub,
    profiles: ProfileRepositoryStub,
    audit_log: AuditLogStub,
    fake_time_authority: FakeTimeAuthority,
) -> RecognitionService:
    return RecognitionService(
        ledger=ledger,
        recognizers=recognizers,
        profiles=profiles,
        time_authority=fake_time_authority,
        audit_log=audit_log,
        config=DEFAULT_RECOGNITION_WEIGHT_CONFIG,
    )


@pytest.fixture
def elder(recognizers: RecognizerDirectoryStub) -> RecognizerRecord:
    """A verified elder (weight 8)."""
    recognizer = make_recognizer(role="elder", name="Elder Sharma")
    recognizers.add_recognizer(recognizer)
    return recognizer


@pytest.fixture
def admin(recognizers: RecognizerDirectoryStub) -> RecognizerRecord:
    """A verified admin (weight 10)."""
    recognizer = make_recognizer(role="admin", name="Admin Rao")
    recognizers.add_recognizer(recognizer)
    return recognizer


@pytest.fixture
def profile_id(profiles: ProfileRepositoryStub):
    profile = make_profile(first_seen_at=T0)
    profiles.add_profile(profile)
    return profile.profile_id
