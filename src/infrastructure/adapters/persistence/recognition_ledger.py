"""PostgreSQL adapter for RecognitionLedgerProtocol.

Appends run in one transaction:
1. ``pg_advisory_xact_lock`` keyed on the profile id serializes appends
   for that profile (released at commit or rollback)
2. The latest entry is read and the draft linked to it
3. The triple is checked and the row inserted

Reads take no locks; committed rows are never modified. Ties on
``created_at`` are broken by ``seq`` (insertion order).

Usage:
    from src.bootstrap.database import get_session_factory

    ledger = PostgresRecognitionLedger(get_session_factory())
    entry = await ledger.append(draft)
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.domain.errors import (
    DuplicateRecognitionError,
    LedgerStoreError,
    LedgerStoreUnavailableError,
)
from src.domain.models.recognition import (
    RecognitionEntry,
    RecognitionEntryDraft,
    RecognitionType,
)

logger = get_logger(__name__)

TRIPLE_CONSTRAINT: str = "uq_recognition_ledger_triple"

_COLUMNS = """
    entry_id, profile_id, recognizer_id, recognition_type, relationship,
    notes, base_weight, recognizer_role, entry_hash, previous_entry_hash,
    created_at, ip_address, user_agent
"""


def _row_to_entry(row: Any) -> RecognitionEntry:
    return RecognitionEntry(
        entry_id=row.entry_id,
        profile_id=row.profile_id,
        recognizer_id=row.recognizer_id,
        recognition_type=RecognitionType(row.recognition_type),
        relationship=row.relationship,
        notes=row.notes,
        base_weight=float(row.base_weight),
        recognizer_role=row.recognizer_role,
        entry_hash=row.entry_hash,
        previous_entry_hash=row.previous_entry_hash,
        created_at=row.created_at,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
    )


class PostgresRecognitionLedger:
    """RecognitionLedgerProtocol backed by the recognition_ledger table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the ledger adapter.

        Args:
            session_factory: SQLAlchemy async session factory.
        """
        self._session_factory = session_factory

    async def append(self, draft: RecognitionEntryDraft) -> RecognitionEntry:
        """Link and insert a draft under the profile's advisory lock.

        Raises:
            DuplicateRecognitionError: The triple is already recorded.
            LedgerStoreUnavailableError: The database cannot be reached.
            LedgerStoreError: Any other persistence failure.
        """
        log = logger.bind(
            profile_id=str(draft.profile_id),
            entry_id=str(draft.entry_id),
        )
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(
                    text("SELECT pg_advisory_xact_lock(hashtextextended(:key, 0))"),
                    {"key": str(draft.profile_id)},
                )

                existing = await self._fetch_triple(
                    session,
                    draft.profile_id,
                    draft.recognizer_id,
                    draft.recognition_type,
                )
                if existing is not None:
                    raise DuplicateRecognitionError(
                        profile_id=draft.profile_id,
                        recognizer_id=draft.recognizer_id,
                        recognition_type=draft.recognition_type.value,
                        existing_entry_id=existing.entry_id,
                        existing_created_at=existing.created_at,
                    )

                latest = await self._fetch_latest(session, draft.profile_id)
                entry = draft.link(latest)

                await session.execute(
                    text(f"""
                        INSERT INTO recognition_ledger ({_COLUMNS})
                        VALUES (
                            :entry_id, :profile_id, :recognizer_id,
                            :recognition_type, :relationship, :notes,
                            :base_weight, :recognizer_role, :entry_hash,
                            :previous_entry_hash, :created_at, :ip_address,
                            :user_agent
                        )
                    """),
                    {
                        "entry_id": entry.entry_id,
                        "profile_id": entry.profile_id,
                        "recognizer_id": entry.recognizer_id,
                        "recognition_type": entry.recognition_type.value,
                        "relationship": entry.relationship,
                        "notes": entry.notes,
                        "base_weight": entry.base_weight,
                        "recognizer_role": entry.recognizer_role,
                        "entry_hash": entry.entry_hash,
                        "previous_entry_hash": entry.previous_entry_hash,
                        "created_at": entry.created_at,
                        "ip_address": entry.ip_address,
                        "user_agent": entry.user_agent,
                    },
                )
        except IntegrityError as e:
            if TRIPLE_CONSTRAINT in str(e.orig):
                raise DuplicateRecognitionError(
                    profile_id=draft.profile_id,
                    recognizer_id=draft.recognizer_id,
                    recognition_type=draft.recognition_type.value,
                ) from None
            log.error("recognition_ledger_integrity_error", error=str(e.orig))
            raise LedgerStoreError(f"Failed to append entry: {e.orig}") from e
        except (OperationalError, InterfaceError, OSError) as e:
            log.error("recognition_ledger_unavailable", error=str(e))
            raise LedgerStoreUnavailableError(
                "Recognition ledger database unavailable"
            ) from e
        except SQLAlchemyError as e:
            log.error("recognition_ledger_append_failed", error=str(e))
            raise LedgerStoreError(f"Failed to append entry: {e}") from e

        log.debug(
            "recognition_ledger_appended",
            previous_entry_hash=entry.previous_entry_hash,
        )
        return entry

    async def exists(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> bool:
        return (
            await self.get_for_triple(profile_id, recognizer_id, recognition_type)
        ) is not None

    async def get_for_triple(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> RecognitionEntry | None:
        async with self._session_factory() as session:
            return await self._read(
                self._fetch_triple(
                    session,
                    profile_id,
                    recognizer_id,
                    RecognitionType(recognition_type),
                )
            )

    async def get_latest(self, profile_id: UUID) -> RecognitionEntry | None:
        async with self._session_factory() as session:
            return await self._read(self._fetch_latest(session, profile_id))

    async def list_for_profile(
        self, profile_id: UUID, newest_first: bool = False
    ) -> list[RecognitionEntry]:
        direction = "DESC" if newest_first else "ASC"
        async with self._session_factory() as session:
            result = await self._read(
                session.execute(
                    text(f"""
                        SELECT {_COLUMNS}
                        FROM recognition_ledger
                        WHERE profile_id = :profile_id
                        ORDER BY created_at {direction}, seq {direction}
                    """),
                    {"profile_id": profile_id},
                )
            )
            return [_row_to_entry(row) for row in result]

    @staticmethod
    async def _read(awaitable: Any) -> Any:
        try:
            return await awaitable
        except (OperationalError, InterfaceError, OSError) as e:
            raise LedgerStoreUnavailableError(
                "Recognition ledger database unavailable"
            ) from e
        except SQLAlchemyError as e:
            raise LedgerStoreError(f"Failed to read ledger: {e}") from e

    @staticmethod
    async def _fetch_triple(
        session: AsyncSession,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
    ) -> RecognitionEntry | None:
        result = await session.execute(
            text(f"""
                SELECT {_COLUMNS}
                FROM recognition_ledger
                WHERE profile_id = :profile_id
                  AND recognizer_id = :recognizer_id
                  AND recognition_type = :recognition_type
            """),
            {
                "profile_id": profile_id,
                "recognizer_id": recognizer_id,
                "recognition_type": recognition_type.value,
            },
        )
        row = result.first()
        return _row_to_entry(row) if row is not None else None

    @staticmethod
    async def _fetch_latest(
        session: AsyncSession, profile_id: UUID
    ) -> RecognitionEntry | None:
        result = await session.execute(
            text(f"""
                SELECT {_COLUMNS}
                FROM recognition_ledger
                WHERE profile_id = :profile_id
                ORDER BY created_at DESC, seq DESC
                LIMIT 1
            """),
            {"profile_id": profile_id},
        )
        row = result.first()
        return _row_to_entry(row) if row is not None else None
