"""Bootstrap wiring for recognition storage adapters.

Chooses the PostgreSQL adapters when DATABASE_URL is set and in-memory
stubs otherwise.
"""

from __future__ import annotations

import os

from src.application.ports.audit_log import AuditLogProtocol
from src.application.ports.profile_repository import ProfileRepositoryProtocol
from src.application.ports.recognition_ledger import RecognitionLedgerProtocol
from src.bootstrap.database import get_session_factory
from src.infrastructure.adapters.persistence import (
    PostgresAuditLog,
    PostgresProfileRepository,
    PostgresRecognitionLedger,
)
from src.infrastructure.stubs.audit_log_stub import AuditLogStub
from src.infrastructure.stubs.profile_repository_stub import ProfileRepositoryStub
from src.infrastructure.stubs.recognition_ledger_stub import RecognitionLedgerStub


def database_configured() -> bool:
    return bool(os.environ.get("DATABASE_URL"))


def build_recognition_ledger() -> RecognitionLedgerProtocol:
    if database_configured():
        return PostgresRecognitionLedger(get_session_factory())
    return RecognitionLedgerStub()


def build_profile_repository() -> ProfileRepositoryProtocol:
    if database_configured():
        return PostgresProfileRepository(get_session_factory())
    return ProfileRepositoryStub()


def build_audit_log() -> AuditLogProtocol:
    if database_configured():
        return PostgresAuditLog(get_session_factory())
    return AuditLogStub()
