"""Unit tests for FraudRiskService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.application.services.fraud_risk_service import FraudRiskService
from src.domain.errors import ProfileNotFoundError
from src.domain.models.recognition import RecognitionType
from src.domain.services.fraud_risk import FraudRiskLevel


@pytest.fixture
def fraud_risk_service(profiles, fake_time_authority) -> FraudRiskService:
    return FraudRiskService(profiles=profiles, time_authority=fake_time_authority)


async def test_unrecognized_profile_is_flagged(fraud_risk_service, profile_id) -> None:
    assessment = await fraud_risk_service.assess(profile_id)
    assert "No recognition from verified users" in assessment.reasons


async def test_recognition_lowers_risk(
    fraud_risk_service, recognition_service, fake_time_authority, profile_id, admin
) -> None:
    fake_time_authority.advance(days=45)
    before = await fraud_risk_service.assess(profile_id)

    await recognition_service.add_recognition(
        profile_id=profile_id,
        recognizer_id=admin.recognizer_id,
        recognition_type=RecognitionType.KNOW_PERSONALLY,
    )
    after = await fraud_risk_service.assess(profile_id)

    assert before.score - after.score == 45
    assert not any("recognition" in reason.lower() for reason in after.reasons)


async def test_uses_time_authority(
    fraud_risk_service, fake_time_authority, profile_id
) -> None:
    fresh = await fraud_risk_service.assess(profile_id)
    fake_time_authority.advance(timedelta(days=31))
    stale = await fraud_risk_service.assess(profile_id)
    assert stale.score == fresh.score + 25
    assert stale.level == FraudRiskLevel.HIGH


async def test_unknown_profile(fraud_risk_service) -> None:
    with pytest.raises(ProfileNotFoundError):
        await fraud_risk_service.assess(uuid4())
