from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_engine
from models.requests import (
    BatchMatchRequest,
    CalibrateRequest,
    LeadQualifyRequest,
    MatchByIdRequest,
    MatchRequest,
)
from models.responses import CalibrateResponse, HealthResponse
from models.schemas import CompanyProfile, LeadScore, MatchResult
from services.calibration import calibration_window
from services.engine import MatchingEngine
from services.profile_store import ProfileNotFoundError

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

RATE_LIMIT = "60/minute"


@router.get("/health", response_model=HealthResponse)
async def health(engine: MatchingEngine = Depends(get_engine)):
    return HealthResponse(
        status="ok",
        embedding_provider=engine.provider.provider_name,
        embedding_dimensions=engine.provider.dimensions,
    )


@router.post("/match", response_model=MatchResult)
@limiter.limit(RATE_LIMIT)
async def match(request: Request, body: MatchRequest, engine: MatchingEngine = Depends(get_engine)):
    return await engine.score_match(body.candidate, body.opportunity)


@router.post("/match/advanced", response_model=MatchResult)
@limiter.limit(RATE_LIMIT)
async def match_advanced(request: Request, body: MatchRequest, engine: MatchingEngine = Depends(get_engine)):
    return await engine.score_advanced_match(body.candidate, body.opportunity)


@router.post("/match/batch", response_model=list[MatchResult])
@limiter.limit("10/minute")
async def match_batch(request: Request, body: BatchMatchRequest, engine: MatchingEngine = Depends(get_engine)):
    return await engine.score_batch(body.pairs, advanced=body.advanced)


@router.post("/match/by-id", response_model=MatchResult)
@limiter.limit(RATE_LIMIT)
async def match_by_id(request: Request, body: MatchByIdRequest, engine: MatchingEngine = Depends(get_engine)):
    try:
        return await engine.score_match_by_id(
            body.candidate_id, body.opportunity_id, advanced=body.advanced
        )
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/leads/score", response_model=LeadScore)
@limiter.limit(RATE_LIMIT)
async def score_lead(request: Request, body: CompanyProfile, engine: MatchingEngine = Depends(get_engine)):
    return engine.score_lead(body)


@router.get("/leads/{company_id}", response_model=LeadScore)
@limiter.limit(RATE_LIMIT)
async def lead_by_id(request: Request, company_id: str, engine: MatchingEngine = Depends(get_engine)):
    try:
        return engine.score_lead_by_id(company_id)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/leads/qualify", response_model=list[LeadScore])
@limiter.limit(RATE_LIMIT)
async def qualify_leads(request: Request, body: LeadQualifyRequest, engine: MatchingEngine = Depends(get_engine)):
    return engine.qualify_leads(body.companies, body.min_score)


@router.post("/calibrate", response_model=CalibrateResponse)
@limiter.limit(RATE_LIMIT)
async def calibrate(request: Request, body: CalibrateRequest, engine: MatchingEngine = Depends(get_engine)):
    return CalibrateResponse(
        raw_score=body.raw_score,
        adjusted_score=engine.calibrate(body.raw_score, body.history),
        history_used=len(calibration_window(body.raw_score, body.history)),
    )
