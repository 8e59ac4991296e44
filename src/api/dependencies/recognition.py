"""Recognition API dependencies.

Dependency injection setup for the recognition engine.

With DATABASE_URL set, the ledger, profile repository and audit log use
the PostgreSQL adapters. Without it, everything runs on in-memory stubs
(development and tests). The recognizer directory is owned by the wider
platform; a stub stands in for it here.

The weight table is read from the environment once, on first use.
"""

from src.application.ports.audit_log import AuditLogProtocol
from src.application.ports.profile_repository import ProfileRepositoryProtocol
from src.application.ports.recognition_ledger import RecognitionLedgerProtocol
from src.application.ports.recognizer_directory import RecognizerDirectoryProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.fraud_risk_service import FraudRiskService
from src.application.services.recognition_chain_service import (
    RecognitionChainService,
)
from src.application.services.recognition_service import RecognitionService
from src.application.services.time_authority_service import TimeAuthorityService
from src.bootstrap.recognition import (
    build_audit_log,
    build_profile_repository,
    build_recognition_ledger,
)
from src.config.recognition_config import RecognitionWeightConfig
from src.infrastructure.stubs.recognizer_directory_stub import (
    RecognizerDirectoryStub,
)

_weight_config: RecognitionWeightConfig | None = None
_time_authority: TimeAuthorityProtocol | None = None
_recognition_ledger: RecognitionLedgerProtocol | None = None
_recognizer_directory: RecognizerDirectoryProtocol | None = None
_profile_repository: ProfileRepositoryProtocol | None = None
_audit_log: AuditLogProtocol | None = None
_recognition_service: RecognitionService | None = None
_recognition_chain_service: RecognitionChainService | None = None
_fraud_risk_service: FraudRiskService | None = None


def get_weight_config() -> RecognitionWeightConfig:
    global _weight_config
    if _weight_config is None:
        _weight_config = RecognitionWeightConfig.from_environment()
    return _weight_config


def get_time_authority() -> TimeAuthorityProtocol:
    global _time_authority
    if _time_authority is None:
        _time_authority = TimeAuthorityService()
    return _time_authority


def get_recognition_ledger() -> RecognitionLedgerProtocol:
    """Get the recognition ledger.

    Returns PostgresRecognitionLedger when DATABASE_URL is set, otherwise
    a singleton RecognitionLedgerStub.
    """
    global _recognition_ledger
    if _recognition_ledger is None:
        _recognition_ledger = build_recognition_ledger()
    return _recognition_ledger


def get_recognizer_directory() -> RecognizerDirectoryProtocol:
    global _recognizer_directory
    if _recognizer_directory is None:
        _recognizer_directory = RecognizerDirectoryStub()
    return _recognizer_directory


def get_profile_repository() -> ProfileRepositoryProtocol:
    """Get the profile repository.

    Returns PostgresProfileRepository when DATABASE_URL is set, otherwise
    a singleton ProfileRepositoryStub.
    """
    global _profile_repository
    if _profile_repository is None:
        _profile_repository = build_profile_repository()
    return _profile_repository


def get_audit_log() -> AuditLogProtocol:
    """Get the audit log sink.

    Returns PostgresAuditLog when DATABASE_URL is set, otherwise a
    singleton AuditLogStub.
    """
    global _audit_log
    if _audit_log is None:
        _audit_log = build_audit_log()
    return _audit_log


def get_recognition_service() -> RecognitionService:
    global _recognition_service
    if _recognition_service is None:
        _recognition_service = RecognitionService(
            ledger=get_recognition_ledger(),
            recognizers=get_recognizer_directory(),
            profiles=get_profile_repository(),
            time_authority=get_time_authority(),
            audit_log=get_audit_log(),
            config=get_weight_config(),
        )
    return _recognition_service


def get_recognition_chain_service() -> RecognitionChainService:
    global _recognition_chain_service
    if _recognition_chain_service is None:
        _recognition_chain_service = RecognitionChainService(
            ledger=get_recognition_ledger()
        )
    return _recognition_chain_service


def get_fraud_risk_service() -> FraudRiskService:
    global _fraud_risk_service
    if _fraud_risk_service is None:
        _fraud_risk_service = FraudRiskService(
            profiles=get_profile_repository(),
            time_authority=get_time_authority(),
        )
    return _fraud_risk_service


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority (for testing)."""
    global _time_authority
    _time_authority = time_authority


def set_recognition_ledger(ledger: RecognitionLedgerProtocol) -> None:
    """Set custom ledger (for testing)."""
    global _recognition_ledger
    _recognition_ledger = ledger


def set_recognizer_directory(directory: RecognizerDirectoryProtocol) -> None:
    """Set custom recognizer directory (for testing)."""
    global _recognizer_directory
    _recognizer_directory = directory


def set_profile_repository(repository: ProfileRepositoryProtocol) -> None:
    """Set custom profile repository (for testing)."""
    global _profile_repository
    _profile_repository = repository


def set_audit_log(audit_log: AuditLogProtocol) -> None:
    """Set custom audit log (for testing)."""
    global _audit_log
    _audit_log = audit_log


def set_weight_config(config: RecognitionWeightConfig) -> None:
    """Set custom weight table (for testing)."""
    global _weight_config
    _weight_config = config


def reset_recognition_dependencies() -> None:
    """Reset all singletons (for testing).

    Services are rebuilt from the current component singletons on next use.
    """
    global _weight_config, _time_authority, _recognition_ledger
    global _recognizer_directory, _profile_repository, _audit_log
    global _recognition_service, _recognition_chain_service, _fraud_risk_service
    _weight_config = None
    _time_authority = None
    _recognition_ledger = None
    _recognizer_directory = None
    _profile_repository = None
    _audit_log = None
    _recognition_service = None
    _recognition_chain_service = None
    _fraud_risk_service = None
