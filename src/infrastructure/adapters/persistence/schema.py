"""Schema installation for the PostgreSQL adapters.

``schema.sql`` holds plpgsql function bodies in dollar quotes, so it is
split into statements here rather than naively on ``;``.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

logger = get_logger(__name__)

SCHEMA_PATH: Path = Path(__file__).with_name("schema.sql")


def split_sql_statements(sql: str) -> list[str]:
    """Split SQL into statements, respecting dollar-quoted blocks.

    Comment-only chunks are dropped.
    """
    statements: list[str] = []
    buffer: list[str] = []
    dollar_tag: str | None = None
    i = 0

    while i < len(sql):
        ch = sql[i]
        if ch == "$":
            j = i + 1
            while j < len(sql) and (sql[j].isalnum() or sql[j] == "_"):
                j += 1
            if j < len(sql) and sql[j] == "$":
                tag = sql[i : j + 1]
                if dollar_tag is None:
                    dollar_tag = tag
                elif tag == dollar_tag:
                    dollar_tag = None
                buffer.append(tag)
                i = j + 1
                continue
        if ch == ";" and dollar_tag is None:
            statements.append("".join(buffer))
            buffer = []
        else:
            buffer.append(ch)
        i += 1

    statements.append("".join(buffer))
    return [s.strip() for s in statements if _has_sql(s)]


def _has_sql(statement: str) -> bool:
    return any(
        line.strip() and not line.strip().startswith("--")
        for line in statement.splitlines()
    )


async def apply_schema(
    session_factory: async_sessionmaker[AsyncSession],
    path: Path = SCHEMA_PATH,
) -> None:
    """Create the ledger and audit tables if they do not exist.

    Idempotent; safe to run at every deployment.
    """
    statements = split_sql_statements(path.read_text())
    async with session_factory() as session, session.begin():
        for statement in statements:
            await session.execute(text(statement))
    logger.info("database_schema_applied", statements=len(statements))
