from pydantic import BaseModel, Field

from models.schemas.profiles import CompanyProfile, EntityId, EntityProfile, HistoricalRecord


class MatchRequest(BaseModel):
    candidate: EntityProfile
    opportunity: EntityProfile


class MatchByIdRequest(BaseModel):
    candidate_id: EntityId
    opportunity_id: EntityId
    advanced: bool = False


class BatchMatchRequest(BaseModel):
    pairs: list[MatchRequest] = Field(..., max_length=500)
    advanced: bool = False


class LeadQualifyRequest(BaseModel):
    companies: list[CompanyProfile] = Field(..., max_length=500)
    min_score: int = Field(70, ge=0, le=100, description="Minimum overall fit to qualify")


class CalibrateRequest(BaseModel):
    raw_score: float = Field(..., ge=0, le=100)
    history: list[HistoricalRecord] = []
