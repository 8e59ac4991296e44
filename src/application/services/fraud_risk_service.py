"""Fraud risk assessment service."""

from __future__ import annotations

from uuid import UUID

from structlog import get_logger

from src.application.ports.profile_repository import ProfileRepositoryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.domain.errors import ProfileNotFoundError
from src.domain.services.fraud_risk import FraudRiskAssessment, compute_fraud_risk

logger = get_logger(__name__)


class FraudRiskService:
    """Loads a profile and evaluates the fraud heuristics against it.

    Uses the cached recognition snapshot, so callers wanting decay applied
    should refresh the snapshot first.
    """

    def __init__(
        self,
        profiles: ProfileRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._profiles = profiles
        self._time = time_authority

    async def assess(self, profile_id: UUID) -> FraudRiskAssessment:
        """Compute the fraud risk of a profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
        """
        profile = await self._profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)

        assessment = compute_fraud_risk(profile, self._time.utcnow())
        logger.debug(
            "fraud_risk_assessed",
            profile_id=str(profile_id),
            score=assessment.score,
            level=assessment.level.value,
        )
        return assessment
