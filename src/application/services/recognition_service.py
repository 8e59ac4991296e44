"""Recognition service implementation.

This module orchestrates adding a recognition to a profile and reading a
profile's recognitions back.

The add flow:
1. Recognizer exists and is verified
2. Profile exists and is not deleted
3. Triple (profile, recognizer, type) is not yet recorded
4. base_weight from the weight table (unknown role or type weighs 1)
5. Timestamp captured, truncated to milliseconds, hashed (the ledger
   re-stamps a draft that lost the race to a later-stamped request)
6. Ledger links and persists the entry atomically per profile
7. Audit record written for the persisted entry (non-fatal)
8. Aggregate recomputed from every entry and written to the profile

The ledger is the source of truth. The profile's recognition snapshot is a
cache, rebuilt from the ledger on every write and on demand.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from structlog import get_logger

from src.application.ports.audit_log import (
    RECOGNITION_ADD_ACTION,
    AuditLogProtocol,
    AuditLogRecord,
)
from src.application.ports.profile_repository import ProfileRepositoryProtocol
from src.application.ports.recognition_ledger import RecognitionLedgerProtocol
from src.application.ports.recognizer_directory import RecognizerDirectoryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.config.recognition_config import (
    DEFAULT_RECOGNITION_WEIGHT_CONFIG,
    RecognitionWeightConfig,
)
from src.domain.errors import (
    DeletedProfileError,
    DuplicateRecognitionError,
    ProfileNotFoundError,
    RecognitionScoreRecomputeError,
    RecognizerNotFoundError,
    UnverifiedRecognizerError,
)
from src.domain.models.recognition import (
    RecognitionAggregate,
    RecognitionEntry,
    RecognitionEntryDraft,
    RecognitionResult,
    RecognitionSummary,
    RecognitionType,
    RecognitionView,
    RequestMetadata,
)
from src.domain.services.recognition_hashing import (
    compute_entry_hash,
    truncate_to_milliseconds,
)
from src.domain.services.recognition_score import compute_recognition_score

logger = get_logger(__name__)

UNKNOWN_RECOGNIZER_NAME: str = "Unknown"
UNKNOWN_RECOGNIZER_ROLE: str = "unknown"


class RecognitionService:
    """Service for adding and reading profile recognitions.

    Example:
        >>> service = RecognitionService(
        ...     ledger=ledger,
        ...     recognizers=recognizer_directory,
        ...     profiles=profile_repository,
        ...     audit_log=audit_log,
        ...     time_authority=time_authority,
        ... )
        >>> result = await service.add_recognition(
        ...     profile_id=profile_id,
        ...     recognizer_id=recognizer_id,
        ...     recognition_type=RecognitionType.KNOW_FAMILY,
        ... )
    """

    def __init__(
        self,
        ledger: RecognitionLedgerProtocol,
        recognizers: RecognizerDirectoryProtocol,
        profiles: ProfileRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        audit_log: AuditLogProtocol | None = None,
        config: RecognitionWeightConfig = DEFAULT_RECOGNITION_WEIGHT_CONFIG,
    ) -> None:
        """Initialize the recognition service.

        Args:
            ledger: Append-only recognition ledger.
            recognizers: Recognizer (user) lookup.
            profiles: Profile lookup and snapshot write.
            time_authority: Clock for write timestamps and decay.
            audit_log: Optional audit sink. If not provided, auditing is
                skipped.
            config: Weight table, injected once at process start.
        """
        self._ledger = ledger
        self._recognizers = recognizers
        self._profiles = profiles
        self._time = time_authority
        self._audit_log = audit_log
        self._config = config

    @property
    def config(self) -> RecognitionWeightConfig:
        return self._config

    async def add_recognition(
        self,
        profile_id: UUID,
        recognizer_id: UUID,
        recognition_type: RecognitionType,
        relationship: str | None = None,
        notes: str | None = None,
        request_metadata: RequestMetadata | None = None,
    ) -> RecognitionResult:
        """Record a recognition and refresh the profile's score.

        Args:
            profile_id: Profile being recognized.
            recognizer_id: Verified user giving the recognition.
            recognition_type: Kind of attestation.
            relationship: Optional relationship text (max 100 chars).
            notes: Optional notes (max 500 chars).
            request_metadata: Caller IP and User-Agent for audit.

        Returns:
            RecognitionResult with the persisted entry and the new aggregate.

        Raises:
            RecognizerNotFoundError: Recognizer does not exist
            UnverifiedRecognizerError: Recognizer is not verified
            ProfileNotFoundError: Profile does not exist
            DeletedProfileError: Profile is deleted
            DuplicateRecognitionError: Triple already recorded
            LedgerStoreError: Ledger persistence failed
            RecognitionScoreRecomputeError: Entry persisted but the snapshot
                could not be updated
        """
        recognition_type = RecognitionType(recognition_type)
        metadata = request_metadata or RequestMetadata()
        log = logger.bind(
            profile_id=str(profile_id),
            recognizer_id=str(recognizer_id),
            recognition_type=recognition_type.value,
        )
        log.debug("recognition_add_started")

        # Step 1: Recognizer exists and is verified
        recognizer = await self._recognizers.get_recognizer(recognizer_id)
        if recognizer is None:
            log.warning("recognition_rejected", reason="recognizer_not_found")
            raise RecognizerNotFoundError(recognizer_id)
        if not recognizer.is_verified:
            log.warning("recognition_rejected", reason="recognizer_unverified")
            raise UnverifiedRecognizerError(recognizer_id)

        # Step 2: Profile exists and is not deleted
        profile = await self._profiles.get(profile_id)
        if profile is None:
            log.warning("recognition_rejected", reason="profile_not_found")
            raise ProfileNotFoundError(profile_id)
        if profile.is_deleted:
            log.warning("recognition_rejected", reason="profile_deleted")
            raise DeletedProfileError(profile_id)

        # Step 3: Best-effort duplicate pre-check; the ledger constraint is
        # authoritative
        existing = await self._ledger.get_for_triple(
            profile_id, recognizer_id, recognition_type
        )
        if existing is not None:
            log.info(
                "duplicate_recognition_attempt",
                detection_method="pre_check",
                existing_entry_id=str(existing.entry_id),
            )
            raise DuplicateRecognitionError(
                profile_id=profile_id,
                recognizer_id=recognizer_id,
                recognition_type=recognition_type.value,
                existing_entry_id=existing.entry_id,
                existing_created_at=existing.created_at,
            )

        # Step 4: Weight at write time
        base_weight = self._base_weight(recognizer.role, recognition_type, log)

        # Step 5: One timestamp for both hash and created_at
        created_at = truncate_to_milliseconds(self._time.utcnow())
        entry_hash = compute_entry_hash(
            profile_id, recognizer_id, recognition_type.value, created_at
        )
        draft = RecognitionEntryDraft(
            entry_id=uuid4(),
            profile_id=profile_id,
            recognizer_id=recognizer_id,
            recognition_type=recognition_type,
            base_weight=base_weight,
            recognizer_role=recognizer.role,
            entry_hash=entry_hash,
            created_at=created_at,
            relationship=relationship,
            notes=notes,
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
        )

        # Step 6: Link and persist under per-profile serialization
        try:
            entry = await self._ledger.append(draft)
        except DuplicateRecognitionError as e:
            # A concurrent request for the same triple won the race
            log.warning(
                "duplicate_recognition_attempt",
                detection_method="ledger_constraint",
                existing_entry_id=str(e.existing_entry_id)
                if e.existing_entry_id
                else None,
            )
            raise

        log = log.bind(entry_id=str(entry.entry_id))

        # Step 7: Audit trail (non-fatal); every persisted entry gets a record
        await self._record_audit(entry, metadata, log)

        # Step 8: Recompute from all entries and write the snapshot
        try:
            aggregate = await self._recompute_and_store(profile_id)
        except Exception as e:
            log.error(
                "recognition_score_recompute_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RecognitionScoreRecomputeError(profile_id, entry.entry_id) from e

        log.info(
            "recognition_added",
            base_weight=entry.base_weight,
            score=aggregate.score,
            level=aggregate.level.value,
            recognizer_count=aggregate.recognizer_count,
            chained=entry.previous_entry_hash is not None,
        )
        return RecognitionResult(entry=entry, aggregate=aggregate)

    async def list_recognitions(self, profile_id: UUID) -> list[RecognitionView]:
        """List a profile's recognitions, newest first.

        Recognizer name and role are resolved at read time; deleted
        recognizers show as "Unknown"/"unknown".
        """
        entries = await self._ledger.list_for_profile(profile_id, newest_first=True)
        views: list[RecognitionView] = []
        for entry in entries:
            recognizer = await self._recognizers.get_recognizer(entry.recognizer_id)
            views.append(
                RecognitionView(
                    entry_id=entry.entry_id,
                    recognition_type=entry.recognition_type,
                    relationship=entry.relationship,
                    notes=entry.notes,
                    base_weight=entry.base_weight,
                    recognizer_name=recognizer.name
                    if recognizer
                    else UNKNOWN_RECOGNIZER_NAME,
                    recognizer_role=recognizer.role
                    if recognizer
                    else UNKNOWN_RECOGNIZER_ROLE,
                    created_at=entry.created_at,
                )
            )
        return views

    async def get_aggregate(self, profile_id: UUID) -> RecognitionAggregate:
        """Recompute the aggregate at the current time without storing it."""
        entries = await self._ledger.list_for_profile(profile_id)
        return compute_recognition_score(entries, self._time.utcnow(), self._config)

    async def get_summary(self, profile_id: UUID) -> RecognitionSummary:
        """Recognitions and current aggregate for a profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
        """
        if await self._profiles.get(profile_id) is None:
            raise ProfileNotFoundError(profile_id)
        recognitions = await self.list_recognitions(profile_id)
        aggregate = await self.get_aggregate(profile_id)
        return RecognitionSummary(recognitions=recognitions, aggregate=aggregate)

    async def refresh_snapshot(self, profile_id: UUID) -> RecognitionAggregate:
        """Rebuild the profile's cached aggregate from the ledger.

        Stored scores only reflect decay when rebuilt; schedulers and
        operators call this to bring them up to date.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
        """
        if await self._profiles.get(profile_id) is None:
            raise ProfileNotFoundError(profile_id)
        aggregate = await self._recompute_and_store(profile_id)
        logger.info(
            "recognition_snapshot_refreshed",
            profile_id=str(profile_id),
            score=aggregate.score,
            level=aggregate.level.value,
        )
        return aggregate

    def _base_weight(
        self, role: str, recognition_type: RecognitionType, log: Any
    ) -> float:
        if not self._config.is_role_mapped(role):
            log.warning("recognition_weight_unmapped", kind="role", value=role)
        if not self._config.is_type_mapped(recognition_type.value):
            log.warning(
                "recognition_weight_unmapped",
                kind="type",
                value=recognition_type.value,
            )
        return self._config.role_weight(role) * self._config.type_multiplier(
            recognition_type.value
        )

    async def _recompute_and_store(self, profile_id: UUID) -> RecognitionAggregate:
        entries = await self._ledger.list_for_profile(profile_id)
        aggregate = compute_recognition_score(
            entries, self._time.utcnow(), self._config
        )
        await self._profiles.update_recognition(profile_id, aggregate)
        return aggregate

    async def _record_audit(
        self, entry: RecognitionEntry, metadata: RequestMetadata, log: Any
    ) -> None:
        if self._audit_log is None:
            return
        record = AuditLogRecord(
            action=RECOGNITION_ADD_ACTION,
            target_type="profile",
            target_id=entry.profile_id,
            performed_by=entry.recognizer_id,
            created_at=entry.created_at,
            changes={
                "type": entry.recognition_type.value,
                "relationship": entry.relationship,
                "base_weight": entry.base_weight,
            },
            ip_address=metadata.ip_address,
            user_agent=metadata.user_agent,
        )
        try:
            await self._audit_log.record(record)
        except Exception as e:
            # Recognition is already recorded; the audit trail is a side channel
            log.error(
                "recognition_audit_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
