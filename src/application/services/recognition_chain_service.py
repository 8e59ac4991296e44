"""Recognition chain verification service.

On-demand integrity checks over a profile's ledger. Detection only: a
broken chain, a fork or a tampered entry is logged and reported, never
repaired, and never checked on the write path.
"""

from __future__ import annotations

from uuid import UUID

from structlog import get_logger

from src.application.ports.recognition_ledger import RecognitionLedgerProtocol
from src.domain.services.recognition_chain import (
    ChainVerificationResult,
    RecognitionForkReport,
    detect_recognition_fork,
    find_tampered_entries,
    verify_recognition_chain,
)

logger = get_logger(__name__)


class RecognitionChainService:
    """Runs chain walks against the stored ledger.

    Example:
        >>> service = RecognitionChainService(ledger=ledger)
        >>> result = await service.verify_chain(profile_id)
        >>> result.valid
        True
    """

    def __init__(self, ledger: RecognitionLedgerProtocol) -> None:
        self._ledger = ledger

    async def verify_chain(self, profile_id: UUID) -> ChainVerificationResult:
        """Verify previous-hash linkage for a profile.

        Returns:
            ChainVerificationResult; a break is a result, not an error.
        """
        entries = await self._ledger.list_for_profile(profile_id)
        result = verify_recognition_chain(entries)

        log = logger.bind(profile_id=str(profile_id))
        if result.valid:
            log.debug("recognition_chain_verified", entries_checked=len(entries))
        else:
            log.warning(
                "recognition_chain_broken",
                broken_at_index=result.broken_at_index,
                entry_id=str(result.entry_id),
            )
        return result

    async def detect_fork(self, profile_id: UUID) -> RecognitionForkReport | None:
        """Report two entries that claim the same predecessor, if any."""
        entries = await self._ledger.list_for_profile(profile_id)
        report = detect_recognition_fork(entries)
        if report is not None:
            logger.warning(
                "recognition_chain_fork_detected",
                profile_id=str(profile_id),
                previous_entry_hash=report.previous_entry_hash,
                conflicting_entry_ids=[str(i) for i in report.conflicting_entry_ids],
            )
        return report

    async def verify_entry_hashes(self, profile_id: UUID) -> list[UUID]:
        """IDs of entries whose stored hash no longer matches their fields."""
        entries = await self._ledger.list_for_profile(profile_id)
        tampered = find_tampered_entries(entries)
        if tampered:
            logger.warning(
                "recognition_entry_hash_mismatch",
                profile_id=str(profile_id),
                entry_ids=[str(i) for i in tampered],
            )
        return tampered
