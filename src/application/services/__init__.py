"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- RecognitionService: Add and read recognitions, refresh score snapshots
- RecognitionChainService: On-demand chain, fork and hash verification
- FraudRiskService: Profile fraud heuristics
- TimeAuthorityService: Production clock
"""

from src.application.services.fraud_risk_service import FraudRiskService
from src.application.services.recognition_chain_service import (
    RecognitionChainService,
)
from src.application.services.recognition_service import RecognitionService
from src.application.services.time_authority_service import TimeAuthorityService

__all__: list[str] = [
    "FraudRiskService",
    "RecognitionChainService",
    "RecognitionService",
    "TimeAuthorityService",
]
