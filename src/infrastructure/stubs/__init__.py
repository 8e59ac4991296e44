"""Infrastructure stubs for development and testing.

This module provides in-memory implementations of the application ports
for use in development and testing environments.

Available stubs:
- RecognitionLedgerStub: Unique triple constraint, per-profile append lock,
  failure injection and raw inserts for integrity tests
- RecognizerDirectoryStub: Seedable recognizer lookup
- ProfileRepositoryStub: Seedable profiles, snapshot write failure injection
- AuditLogStub: Collected audit records, failure injection

WARNING: These stubs are NOT for production use.
Production implementations are in src/infrastructure/adapters/.
"""

from src.infrastructure.stubs.audit_log_stub import (
    AuditLogStub,
    get_audit_log_stub,
    reset_audit_log_stub,
)
from src.infrastructure.stubs.profile_repository_stub import (
    ProfileRepositoryStub,
    get_profile_repository_stub,
    reset_profile_repository_stub,
)
from src.infrastructure.stubs.recognition_ledger_stub import (
    RecognitionLedgerStub,
    get_recognition_ledger_stub,
    reset_recognition_ledger_stub,
)
from src.infrastructure.stubs.recognizer_directory_stub import (
    RecognizerDirectoryStub,
    get_recognizer_directory_stub,
    reset_recognizer_directory_stub,
)

__all__: list[str] = [
    "AuditLogStub",
    "ProfileRepositoryStub",
    "RecognitionLedgerStub",
    "RecognizerDirectoryStub",
    "get_audit_log_stub",
    "get_profile_repository_stub",
    "get_recognition_ledger_stub",
    "get_recognizer_directory_stub",
    "reset_audit_log_stub",
    "reset_profile_repository_stub",
    "reset_recognition_ledger_stub",
    "reset_recognizer_directory_stub",
]
