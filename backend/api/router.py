import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_matching_service
from config import settings
from models.requests import ScoreRequest
from models.responses import HealthResponse, ScoreResponse
from services.matching_service import MatchingIntegrationError, MatchingService
from services.scoring.errors import ScoringError

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health(service: MatchingService = Depends(get_matching_service)):
    return HealthResponse(status="ok", scoring_policy=service.pipeline.policy.policy.value)


@router.post("/score", response_model=ScoreResponse)
@limiter.limit(settings.rate_limit)
async def score(
    request: Request,
    body: ScoreRequest,
    service: MatchingService = Depends(get_matching_service),
):
    try:
        result = await service.score(body.resume, body.job)
    except MatchingIntegrationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": exc.message, "code": exc.code, "details": exc.details},
        )
    except ScoringError as exc:
        raise HTTPException(status_code=500, detail=exc.message)

    # Incompatible jobs are a normal 200 response carrying the blockers
    return ScoreResponse.from_result(result)
