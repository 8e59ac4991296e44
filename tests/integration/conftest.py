"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container and a per-test session
factory with the recognition schema applied.

Container Reuse Pattern:
- The container is started once per test session (scope="session")
- Tables are truncated after each test (function-scoped fixture)
- The container is automatically cleaned up after all tests complete

Usage:
    @pytest.mark.integration
    async def test_example(session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        ...

Note: Docker must be running for these fixtures to work.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from src.infrastructure.adapters.persistence.schema import apply_schema


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Get async-compatible PostgreSQL connection URL.

    testcontainers returns a psycopg2 URL by default; convert to asyncpg.
    """
    sync_url = postgres_container.get_connection_url()
    async_url: str = sync_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    ).replace("postgresql://", "postgresql+asyncpg://")
    return async_url


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Per-test session factory over a freshly schema'd database.

    Adapters commit their own transactions, so isolation comes from
    truncating the tables after each test rather than a rollback.
    """
    engine = create_async_engine(postgres_async_url, echo=False)
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await apply_schema(factory)

    yield factory

    async with factory() as session, session.begin():
        await session.execute(text("TRUNCATE recognition_ledger, audit_logs, profiles"))
    await engine.dispose()
