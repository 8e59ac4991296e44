"""Integration tests for the PostgreSQL ledger, profile and audit adapters."""

import asyncio
import json
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from src.application.ports.audit_log import RECOGNITION_ADD_ACTION, AuditLogRecord
from src.application.services.recognition_chain_service import (
    RecognitionChainService,
)
from src.application.services.recognition_service import RecognitionService
from src.domain.errors import DuplicateRecognitionError, ProfileNotFoundError
from src.domain.models.profile import ProfileStatus
from src.domain.models.recognition import (
    RecognitionAggregate,
    RecognitionEntryDraft,
    RecognitionLevel,
    RecognitionType,
)
from src.domain.services.recognition_hashing import compute_entry_hash
from src.infrastructure.adapters.persistence import (
    PostgresAuditLog,
    PostgresProfileRepository,
    PostgresRecognitionLedger,
)
from src.infrastructure.adapters.persistence.schema import apply_schema
from src.infrastructure.stubs import RecognizerDirectoryStub
from tests.helpers import FakeTimeAuthority, make_profile, make_recognizer
from tests.helpers.builders import T0

pytestmark = pytest.mark.integration


def _draft(
    profile_id,
    recognizer_id=None,
    recognition_type=RecognitionType.KNOW_FAMILY,
    created_at=T0,
) -> RecognitionEntryDraft:
    recognizer_id = recognizer_id or uuid4()
    return RecognitionEntryDraft(
        entry_id=uuid4(),
        profile_id=profile_id,
        recognizer_id=recognizer_id,
        recognition_type=recognition_type,
        base_weight=10.4,
        recognizer_role="elder",
        entry_hash=compute_entry_hash(
            profile_id, recognizer_id, recognition_type.value, created_at
        ),
        created_at=created_at,
        relationship="neighbor",
        ip_address="203.0.113.7",
    )


class TestPostgresRecognitionLedger:
    async def test_round_trip(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        draft = _draft(uuid4())
        entry = await ledger.append(draft)

        (stored,) = await ledger.list_for_profile(draft.profile_id)
        assert stored == entry
        assert stored.verify_entry_hash()
        assert await ledger.exists(*entry.triple)
        assert await ledger.get_for_triple(*entry.triple) == entry

    async def test_links_entries(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        profile_id = uuid4()
        first = await ledger.append(_draft(profile_id))
        second = await ledger.append(
            _draft(profile_id, created_at=T0 + timedelta(seconds=1))
        )
        assert first.previous_entry_hash is None
        assert second.previous_entry_hash == first.entry_hash
        assert await ledger.get_latest(profile_id) == second

    async def test_older_draft_is_restamped_behind_latest(
        self, session_factory
    ) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        profile_id = uuid4()
        later = await ledger.append(
            _draft(profile_id, created_at=T0 + timedelta(milliseconds=5))
        )
        earlier = await ledger.append(_draft(profile_id, created_at=T0))

        assert earlier.created_at == later.created_at
        entries = await ledger.list_for_profile(profile_id)
        assert [e.entry_id for e in entries] == [later.entry_id, earlier.entry_id]
        assert all(e.verify_entry_hash() for e in entries)
        assert await ledger.get_latest(profile_id) == earlier

    async def test_newest_first(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        profile_id = uuid4()
        for i in range(3):
            await ledger.append(_draft(profile_id, created_at=T0 + timedelta(days=i)))
        newest = await ledger.list_for_profile(profile_id, newest_first=True)
        assert [e.created_at for e in newest] == [
            T0 + timedelta(days=2),
            T0 + timedelta(days=1),
            T0,
        ]

    async def test_duplicate_triple(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        profile_id, recognizer_id = uuid4(), uuid4()
        first = await ledger.append(_draft(profile_id, recognizer_id))
        with pytest.raises(DuplicateRecognitionError) as exc_info:
            await ledger.append(
                _draft(profile_id, recognizer_id, created_at=T0 + timedelta(hours=1))
            )
        assert exc_info.value.existing_entry_id == first.entry_id

    async def test_concurrent_appends_form_one_chain(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        chain_service = RecognitionChainService(ledger)
        profile_id = uuid4()

        # Identical timestamps: order falls back to insertion sequence
        await asyncio.gather(*[ledger.append(_draft(profile_id)) for _ in range(8)])

        result = await chain_service.verify_chain(profile_id)
        assert result.valid
        assert result.entries_checked == 8
        assert await chain_service.detect_fork(profile_id) is None

    async def test_rows_cannot_be_updated(self, session_factory) -> None:
        ledger = PostgresRecognitionLedger(session_factory)
        entry = await ledger.append(_draft(uuid4()))
        with pytest.raises(DBAPIError, match="append-only"):
            async with session_factory() as session, session.begin():
                await session.execute(
                    text(
                        "UPDATE recognition_ledger SET base_weight = 99 "
                        "WHERE entry_id = :id"
                    ),
                    {"id": entry.entry_id},
                )

    async def test_schema_is_idempotent(self, session_factory) -> None:
        await apply_schema(session_factory)


class TestPostgresAuditLog:
    async def test_insert(self, session_factory) -> None:
        audit_log = PostgresAuditLog(session_factory)
        record = AuditLogRecord(
            action=RECOGNITION_ADD_ACTION,
            target_type="profile",
            target_id=uuid4(),
            performed_by=uuid4(),
            created_at=T0,
            changes={"type": "know_family", "relationship": None, "base_weight": 10.4},
            user_agent="pytest",
        )
        await audit_log.record(record)

        async with session_factory() as session:
            row = (
                await session.execute(
                    text(
                        "SELECT action, changes::text AS changes, user_agent "
                        "FROM audit_logs"
                    )
                )
            ).one()
        assert row.action == "recognition_add"
        assert json.loads(row.changes) == dict(record.changes)
        assert row.user_agent == "pytest"


async def test_service_end_to_end(session_factory) -> None:
    recognizers = RecognizerDirectoryStub()
    profiles = PostgresProfileRepository(session_factory)
    elder = make_recognizer(role="elder")
    admin = make_recognizer(role="admin")
    recognizers.add_recognizer(elder)
    recognizers.add_recognizer(admin)
    profile = make_profile()
    await profiles.save(profile)
    time_authority = FakeTimeAuthority(frozen_at=T0)

    service = RecognitionService(
        ledger=PostgresRecognitionLedger(session_factory),
        recognizers=recognizers,
        profiles=profiles,
        time_authority=time_authority,
        audit_log=PostgresAuditLog(session_factory),
    )
    await service.add_recognition(
        profile_id=profile.profile_id,
        recognizer_id=elder.recognizer_id,
        recognition_type=RecognitionType.KNOW_FAMILY,
    )
    time_authority.advance(milliseconds=1)
    result = await service.add_recognition(
        profile_id=profile.profile_id,
        recognizer_id=admin.recognizer_id,
        recognition_type=RecognitionType.KNOW_PERSONALLY,
    )

    assert result.aggregate.score == 25.4
    assert result.aggregate.recognizer_count == 2
    with pytest.raises(DuplicateRecognitionError):
        await service.add_recognition(
            profile_id=profile.profile_id,
            recognizer_id=admin.recognizer_id,
            recognition_type=RecognitionType.KNOW_PERSONALLY,
        )

    # The snapshot is durable: a fresh adapter sees it
    stored = await PostgresProfileRepository(session_factory).get(profile.profile_id)
    assert stored.recognition == result.aggregate


class TestPostgresProfileRepository:
    async def test_save_and_get(self, session_factory) -> None:
        profiles = PostgresProfileRepository(session_factory)
        profile = make_profile(
            status=ProfileStatus.MATCHED,
            phone_reused=True,
            flag_count=2,
            photo_count=3,
            completeness=0.75,
        )
        await profiles.save(profile)
        assert await profiles.get(profile.profile_id) == profile

    async def test_missing_profile(self, session_factory) -> None:
        assert await PostgresProfileRepository(session_factory).get(uuid4()) is None

    async def test_update_recognition_overwrites_snapshot(
        self, session_factory
    ) -> None:
        profiles = PostgresProfileRepository(session_factory)
        profile = make_profile()
        await profiles.save(profile)
        aggregate = RecognitionAggregate(
            score=17.2,
            level=RecognitionLevel.LOW,
            recognizer_count=2,
            last_recognition_at=T0 + timedelta(weeks=52),
        )

        await profiles.update_recognition(profile.profile_id, aggregate)

        stored = await profiles.get(profile.profile_id)
        assert stored.recognition == aggregate
        assert stored.full_name == profile.full_name

    async def test_update_unknown_profile(self, session_factory) -> None:
        profiles = PostgresProfileRepository(session_factory)
        with pytest.raises(ProfileNotFoundError):
            await profiles.update_recognition(uuid4(), RecognitionAggregate.empty())
