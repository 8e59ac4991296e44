"""PostgreSQL adapter for ProfileRepositoryProtocol.

Profiles are owned by the wider platform. The engine reads the columns it
needs and writes only the ``recognition_*`` snapshot columns, so every
worker sees the same cached score.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.domain.errors import (
    LedgerStoreError,
    LedgerStoreUnavailableError,
    ProfileNotFoundError,
)
from src.domain.models.profile import ProfileRecord, ProfileStatus
from src.domain.models.recognition import RecognitionAggregate, RecognitionLevel

logger = get_logger(__name__)

_COLUMNS = """
    profile_id, full_name, status, first_seen_at, phone_reused, flag_count,
    photo_count, completeness, recognition_score, recognition_level,
    recognizer_count, last_recognition_at
"""


def _row_to_profile(row: Any) -> ProfileRecord:
    return ProfileRecord(
        profile_id=row.profile_id,
        full_name=row.full_name,
        status=ProfileStatus(row.status),
        first_seen_at=row.first_seen_at,
        phone_reused=row.phone_reused,
        flag_count=row.flag_count,
        photo_count=row.photo_count,
        completeness=float(row.completeness),
        recognition=RecognitionAggregate(
            score=float(row.recognition_score),
            level=RecognitionLevel(row.recognition_level),
            recognizer_count=row.recognizer_count,
            last_recognition_at=row.last_recognition_at,
        ),
    )


class PostgresProfileRepository:
    """ProfileRepositoryProtocol backed by the profiles table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, profile_id: UUID) -> ProfileRecord | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"""
                        SELECT {_COLUMNS}
                        FROM profiles
                        WHERE profile_id = :profile_id
                    """),
                    {"profile_id": profile_id},
                )
                row = result.first()
        except (OperationalError, InterfaceError, OSError) as e:
            raise LedgerStoreUnavailableError("Profile database unavailable") from e
        except SQLAlchemyError as e:
            raise LedgerStoreError(f"Failed to read profile: {e}") from e
        return _row_to_profile(row) if row is not None else None

    async def update_recognition(
        self, profile_id: UUID, aggregate: RecognitionAggregate
    ) -> None:
        """Overwrite the profile's recognition snapshot columns.

        Raises:
            ProfileNotFoundError: If no profile row matched.
            LedgerStoreUnavailableError: The database cannot be reached.
            LedgerStoreError: Any other persistence failure.
        """
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(
                    text("""
                        UPDATE profiles
                        SET recognition_score = :score,
                            recognition_level = :level,
                            recognizer_count = :recognizer_count,
                            last_recognition_at = :last_recognition_at
                        WHERE profile_id = :profile_id
                        RETURNING profile_id
                    """),
                    {
                        "profile_id": profile_id,
                        "score": aggregate.score,
                        "level": aggregate.level.value,
                        "recognizer_count": aggregate.recognizer_count,
                        "last_recognition_at": aggregate.last_recognition_at,
                    },
                )
                updated = result.first()
        except (OperationalError, InterfaceError, OSError) as e:
            logger.error(
                "profile_snapshot_unavailable",
                profile_id=str(profile_id),
                error=str(e),
            )
            raise LedgerStoreUnavailableError("Profile database unavailable") from e
        except SQLAlchemyError as e:
            logger.error(
                "profile_snapshot_update_failed",
                profile_id=str(profile_id),
                error=str(e),
            )
            raise LedgerStoreError(f"Failed to update profile: {e}") from e

        if updated is None:
            raise ProfileNotFoundError(profile_id)

    async def save(self, profile: ProfileRecord) -> None:
        """Insert a profile or replace every column of an existing one.

        Used to seed profiles; the platform normally owns these rows.
        """
        recognition = profile.recognition
        async with self._session_factory() as session, session.begin():
            await session.execute(
                text(f"""
                    INSERT INTO profiles ({_COLUMNS})
                    VALUES (
                        :profile_id, :full_name, :status, :first_seen_at,
                        :phone_reused, :flag_count, :photo_count,
                        :completeness, :recognition_score,
                        :recognition_level, :recognizer_count,
                        :last_recognition_at
                    )
                    ON CONFLICT (profile_id) DO UPDATE SET
                        full_name = EXCLUDED.full_name,
                        status = EXCLUDED.status,
                        first_seen_at = EXCLUDED.first_seen_at,
                        phone_reused = EXCLUDED.phone_reused,
                        flag_count = EXCLUDED.flag_count,
                        photo_count = EXCLUDED.photo_count,
                        completeness = EXCLUDED.completeness,
                        recognition_score = EXCLUDED.recognition_score,
                        recognition_level = EXCLUDED.recognition_level,
                        recognizer_count = EXCLUDED.recognizer_count,
                        last_recognition_at = EXCLUDED.last_recognition_at
                """),
                {
                    "profile_id": profile.profile_id,
                    "full_name": profile.full_name,
                    "status": profile.status.value,
                    "first_seen_at": profile.first_seen_at,
                    "phone_reused": profile.phone_reused,
                    "flag_count": profile.flag_count,
                    "photo_count": profile.photo_count,
                    "completeness": profile.completeness,
                    "recognition_score": recognition.score,
                    "recognition_level": recognition.level.value,
                    "recognizer_count": recognition.recognizer_count,
                    "last_recognition_at": recognition.last_recognition_at,
                },
            )
