"""PostgreSQL persistence adapters (SQLAlchemy async + asyncpg)."""

from src.infrastructure.adapters.persistence.audit_log import PostgresAuditLog
from src.infrastructure.adapters.persistence.profile_repository import (
    PostgresProfileRepository,
)
from src.infrastructure.adapters.persistence.recognition_ledger import (
    PostgresRecognitionLedger,
)
from src.infrastructure.adapters.persistence.schema import (
    SCHEMA_PATH,
    apply_schema,
    split_sql_statements,
)

__all__: list[str] = [
    "SCHEMA_PATH",
    "PostgresAuditLog",
    "PostgresProfileRepository",
    "PostgresRecognitionLedger",
    "apply_schema",
    "split_sql_statements",
]
