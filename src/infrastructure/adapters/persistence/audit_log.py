"""PostgreSQL adapter for AuditLogProtocol."""

from __future__ import annotations

import json

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.ports.audit_log import AuditLogRecord


class PostgresAuditLog:
    """AuditLogProtocol backed by the audit_logs table.

    Errors propagate to the caller, which treats audit failures as
    non-fatal.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, entry: AuditLogRecord) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(
                text("""
                    INSERT INTO audit_logs (
                        action, target_type, target_id, performed_by,
                        changes, ip_address, user_agent, created_at
                    )
                    VALUES (
                        :action, :target_type, :target_id, :performed_by,
                        CAST(:changes AS JSONB), :ip_address, :user_agent,
                        :created_at
                    )
                """),
                {
                    "action": entry.action,
                    "target_type": entry.target_type,
                    "target_id": entry.target_id,
                    "performed_by": entry.performed_by,
                    "changes": json.dumps(dict(entry.changes)),
                    "ip_address": entry.ip_address,
                    "user_agent": entry.user_agent,
                    "created_at": entry.created_at,
                },
            )
