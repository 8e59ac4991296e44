"""In-memory stub for AuditLogProtocol."""

from __future__ import annotations

from src.application.ports.audit_log import AuditLogRecord


class AuditLogStub:
    """Collects audit records in memory.

    Call ``set_failing(True)`` to make ``record`` raise, simulating an
    unavailable audit store.
    """

    def __init__(self) -> None:
        self._records: list[AuditLogRecord] = []
        self._failing = False

    async def record(self, entry: AuditLogRecord) -> None:
        if self._failing:
            raise ConnectionError("Audit log unavailable")
        self._records.append(entry)

    # Test helper methods

    @property
    def records(self) -> list[AuditLogRecord]:
        return list(self._records)

    def set_failing(self, failing: bool) -> None:
        self._failing = failing

    def reset(self) -> None:
        self._records.clear()
        self._failing = False


# Singleton instance for dependency injection
_audit_log_stub: AuditLogStub | None = None


def get_audit_log_stub() -> AuditLogStub:
    """Get the singleton audit log stub."""
    global _audit_log_stub
    if _audit_log_stub is None:
        _audit_log_stub = AuditLogStub()
    return _audit_log_stub


def reset_audit_log_stub() -> None:
    global _audit_log_stub
    _audit_log_stub = AuditLogStub()
