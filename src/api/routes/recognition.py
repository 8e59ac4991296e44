"""Recognition API routes.

FastAPI router for profile recognition endpoints:
- POST /v1/profiles/{profile_id}/recognitions: recognize a profile
- GET  /v1/profiles/{profile_id}/recognitions: list recognitions + summary
- GET  /v1/profiles/{profile_id}/recognitions/aggregate: current aggregate
- GET  /v1/profiles/{profile_id}/recognitions/chain: chain integrity check
- GET  /v1/profiles/{profile_id}/fraud-risk: fraud risk assessment

The recognizer is identified by the X-Recognizer-ID header; authenticating
that header is the gateway's job. Caller-facing failures are returned as
RFC 7807 problem details with the human-readable reason; unexpected
failures return a generic message.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from structlog import get_logger

from src.api.dependencies.recognition import (
    get_fraud_risk_service,
    get_recognition_chain_service,
    get_recognition_service,
)
from src.api.models.recognition import (
    AddRecognitionRequest,
    AddRecognitionResponse,
    ChainVerificationResponse,
    FraudRiskResponse,
    RecognitionAggregateResponse,
    RecognitionEntryResponse,
    RecognitionErrorResponse,
    RecognitionListResponse,
    RecognitionViewResponse,
)
from src.application.services.fraud_risk_service import FraudRiskService
from src.application.services.recognition_chain_service import (
    RecognitionChainService,
)
from src.application.services.recognition_service import RecognitionService
from src.domain.errors import (
    LedgerStoreError,
    LedgerStoreUnavailableError,
    RecognitionError,
    RecognitionScoreRecomputeError,
)
from src.domain.models.recognition import (
    RecognitionAggregate,
    RecognitionEntry,
    RequestMetadata,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/profiles", tags=["recognition"])

RECOGNIZER_HEADER = "X-Recognizer-ID"

_ERROR_RESPONSES: dict = {
    403: {"model": RecognitionErrorResponse, "description": "Recognizer not verified"},
    404: {
        "model": RecognitionErrorResponse,
        "description": "Recognizer or profile not found",
    },
    409: {
        "model": RecognitionErrorResponse,
        "description": "Duplicate recognition or deleted profile",
    },
}


def _problem(
    request: Request, status: int, error_type: str, title: str, detail: str
) -> HTTPException:
    return HTTPException(
        status_code=status,
        detail={
            "type": error_type,
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url),
        },
    )


def _from_recognition_error(request: Request, error: RecognitionError) -> HTTPException:
    detail = error.to_rfc7807_dict()
    detail["instance"] = str(request.url)
    return HTTPException(status_code=error.status_code, detail=detail)


def _aggregate_response(aggregate: RecognitionAggregate) -> RecognitionAggregateResponse:
    return RecognitionAggregateResponse(
        score=aggregate.score,
        level=aggregate.level,
        recognizer_count=aggregate.recognizer_count,
        last_recognition_at=aggregate.last_recognition_at,
    )


def _entry_response(entry: RecognitionEntry) -> RecognitionEntryResponse:
    return RecognitionEntryResponse(
        entry_id=entry.entry_id,
        profile_id=entry.profile_id,
        recognizer_id=entry.recognizer_id,
        type=entry.recognition_type,
        relationship=entry.relationship,
        notes=entry.notes,
        base_weight=entry.base_weight,
        recognizer_role=entry.recognizer_role,
        entry_hash=entry.entry_hash,
        previous_entry_hash=entry.previous_entry_hash,
        created_at=entry.created_at,
    )


@router.post(
    "/{profile_id}/recognitions",
    response_model=AddRecognitionResponse,
    status_code=201,
    responses={
        401: {"model": RecognitionErrorResponse, "description": "No recognizer"},
        **_ERROR_RESPONSES,
        503: {
            "model": RecognitionErrorResponse,
            "description": "Ledger unavailable",
        },
    },
    summary="Recognize a profile",
)
async def add_recognition(
    profile_id: UUID,
    request_data: AddRecognitionRequest,
    request: Request,
    recognizer_id: UUID | None = Header(default=None, alias=RECOGNIZER_HEADER),
    service: RecognitionService = Depends(get_recognition_service),
) -> AddRecognitionResponse:
    """Add a recognition from the calling recognizer.

    Raises:
        HTTPException 401: No X-Recognizer-ID header
        HTTPException 403: Recognizer is not verified
        HTTPException 404: Recognizer or profile not found
        HTTPException 409: Duplicate recognition or deleted profile
        HTTPException 500: Unexpected failure, or recognition recorded but
            score not updated
        HTTPException 503: Ledger unavailable
    """
    if recognizer_id is None:
        raise _problem(
            request,
            401,
            "urn:pehchan:recognition:unauthenticated",
            "Unauthenticated",
            "Authentication required",
        )

    metadata = RequestMetadata(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    try:
        result = await service.add_recognition(
            profile_id=profile_id,
            recognizer_id=recognizer_id,
            recognition_type=request_data.type,
            relationship=request_data.relationship,
            notes=request_data.notes,
            request_metadata=metadata,
        )
    except RecognitionError as e:
        raise _from_recognition_error(request, e) from None
    except RecognitionScoreRecomputeError as e:
        raise _problem(
            request,
            500,
            "urn:pehchan:recognition:score-stale",
            "Score Update Failed",
            "Recognition was recorded but the score could not be updated",
        ) from e
    except LedgerStoreUnavailableError as e:
        raise _problem(
            request,
            503,
            "urn:pehchan:recognition:unavailable",
            "Service Unavailable",
            "Recognition service temporarily unavailable",
        ) from e
    except LedgerStoreError as e:
        logger.error("recognition_add_failed", error=str(e))
        raise _problem(
            request,
            500,
            "urn:pehchan:recognition:internal",
            "Internal Server Error",
            "Failed to add recognition",
        ) from e

    return AddRecognitionResponse(
        recognition=_entry_response(result.entry),
        new_score=_aggregate_response(result.aggregate),
    )


@router.get(
    "/{profile_id}/recognitions",
    response_model=RecognitionListResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="List a profile's recognitions",
)
async def list_recognitions(
    profile_id: UUID,
    request: Request,
    service: RecognitionService = Depends(get_recognition_service),
) -> RecognitionListResponse:
    """Recognitions newest first, with the current aggregate."""
    try:
        summary = await service.get_summary(profile_id)
    except RecognitionError as e:
        raise _from_recognition_error(request, e) from None

    return RecognitionListResponse(
        recognitions=[
            RecognitionViewResponse(
                entry_id=view.entry_id,
                type=view.recognition_type,
                relationship=view.relationship,
                notes=view.notes,
                base_weight=view.base_weight,
                recognizer_name=view.recognizer_name,
                recognizer_role=view.recognizer_role,
                created_at=view.created_at,
            )
            for view in summary.recognitions
        ],
        summary=_aggregate_response(summary.aggregate),
    )


@router.get(
    "/{profile_id}/recognitions/aggregate",
    response_model=RecognitionAggregateResponse,
    summary="Current recognition aggregate",
)
async def get_recognition_aggregate(
    profile_id: UUID,
    service: RecognitionService = Depends(get_recognition_service),
) -> RecognitionAggregateResponse:
    """Recompute the aggregate at the current time. Read only."""
    return _aggregate_response(await service.get_aggregate(profile_id))


@router.get(
    "/{profile_id}/recognitions/chain",
    response_model=ChainVerificationResponse,
    summary="Verify a profile's recognition chain",
)
async def verify_recognition_chain(
    profile_id: UUID,
    service: RecognitionChainService = Depends(get_recognition_chain_service),
) -> ChainVerificationResponse:
    """Walk the chain and recheck entry hashes.

    A broken chain is reported in the body with status 200.
    """
    result = await service.verify_chain(profile_id)
    tampered = await service.verify_entry_hashes(profile_id)
    return ChainVerificationResponse(
        profile_id=profile_id,
        valid=result.valid and not tampered,
        broken_at_index=result.broken_at_index,
        entry_id=result.entry_id,
        entries_checked=result.entries_checked,
        tampered_entry_ids=tampered,
    )


@router.get(
    "/{profile_id}/fraud-risk",
    response_model=FraudRiskResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Fraud risk assessment",
)
async def get_fraud_risk(
    profile_id: UUID,
    request: Request,
    service: FraudRiskService = Depends(get_fraud_risk_service),
) -> FraudRiskResponse:
    try:
        assessment = await service.assess(profile_id)
    except RecognitionError as e:
        raise _from_recognition_error(request, e) from None

    return FraudRiskResponse(
        profile_id=profile_id,
        score=assessment.score,
        level=assessment.level,
        reasons=list(assessment.reasons),
    )
