"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- RecognitionLedgerProtocol: Append-only, hash-chained recognition ledger
- RecognizerDirectoryProtocol: Recognizer (user) lookup
- ProfileRepositoryProtocol: Profile lookup and snapshot write
- AuditLogProtocol: Audit trail sink
- TimeAuthorityProtocol: Injected clock
"""

from src.application.ports.audit_log import (
    RECOGNITION_ADD_ACTION,
    AuditLogProtocol,
    AuditLogRecord,
)
from src.application.ports.profile_repository import ProfileRepositoryProtocol
from src.application.ports.recognition_ledger import RecognitionLedgerProtocol
from src.application.ports.recognizer_directory import (
    RecognizerDirectoryProtocol,
    RecognizerRecord,
)
from src.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "RECOGNITION_ADD_ACTION",
    "AuditLogProtocol",
    "AuditLogRecord",
    "ProfileRepositoryProtocol",
    "RecognitionLedgerProtocol",
    "RecognizerDirectoryProtocol",
    "RecognizerRecord",
    "TimeAuthorityProtocol",
]
