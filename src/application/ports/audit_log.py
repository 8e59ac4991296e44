"""Audit log port.

Every accepted recognition writes one audit record. The audit log is a
side channel: a failed write is logged by the caller and never undoes or
fails the recognition itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

RECOGNITION_ADD_ACTION: str = "recognition_add"


@dataclass(frozen=True)
class AuditLogRecord:
    """One audit trail row.

    Attributes:
        action: What happened (e.g. "recognition_add").
        target_type: Kind of object acted on (e.g. "profile").
        target_id: ID of the object acted on.
        performed_by: User who performed the action.
        changes: Action-specific details.
        created_at: When the action happened.
        ip_address: Request IP address, if known.
        user_agent: Request User-Agent, if known.
    """

    action: str
    target_type: str
    target_id: UUID
    performed_by: UUID
    created_at: datetime
    changes: Mapping[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "target_type": self.target_type,
            "target_id": str(self.target_id),
            "performed_by": str(self.performed_by),
            "changes": dict(self.changes),
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "created_at": self.created_at.isoformat(),
        }


class AuditLogProtocol(Protocol):
    """Protocol for audit log sinks."""

    async def record(self, entry: AuditLogRecord) -> None:
        """Persist an audit record.

        Raises:
            Exception: Any adapter failure. Callers treat it as non-fatal.
        """
        ...
