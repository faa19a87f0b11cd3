"""Pydantic contracts shared by the scoring services and the HTTP layer."""

from models.schemas.profiles import (
    ApplicationRecord,
    ApplicationStatus,
    CompanyProfile,
    Compensation,
    EntityProfile,
    ExperienceLevel,
    HistoricalRecord,
    LanguageLevel,
)
from models.schemas.match_result import MatchResult
from models.schemas.lead_score import LeadScore

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "CompanyProfile",
    "Compensation",
    "EntityProfile",
    "ExperienceLevel",
    "HistoricalRecord",
    "LanguageLevel",
    "MatchResult",
    "LeadScore",
]
