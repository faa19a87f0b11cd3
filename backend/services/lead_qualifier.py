"""Company (recruitment lead) qualification."""

import logging
from collections.abc import Mapping

from config import LeadWeights
from models.schemas.lead_score import LeadScore
from models.schemas.profiles import CompanyProfile
from services.ensemble import Ensemble
from services.score_utils import NEUTRAL_SCORE, clamp_score

logger = logging.getLogger(__name__)

TARGET_INDUSTRIES = frozenset({"agriculture", "forestry", "manufacturing", "construction"})

_SIZE_SCORES = {"small": 70, "medium": 85, "large": 95}

_RELOCATION_BONUSES = (
    ("offers_relocation", 25),
    ("provides_housing", 15),
    ("helps_with_visa", 10),
    ("transport_support", 10),
    ("language_training", 5),
)

# Sub-score -> reason shown when it is strong (> 80)
_REASONS = (
    ("financial_health", "Strong financial position"),
    ("hiring_urgency", "Active hiring needs"),
    ("relocation_support", "Good relocation support"),
    ("industry_match", "Industry fits recruitment profile"),
    ("communication_quality", "Fast, responsive communication"),
)
LIMITED_DATA_REASON = "Score calculated with limited data"


def financial_health(company: CompanyProfile) -> int:
    if company.revenue is None:
        return NEUTRAL_SCORE
    return clamp_score(company.revenue / 1_000_000 * 20)


def hiring_urgency(company: CompanyProfile) -> int:
    return 80 if (company.open_positions or 0) > 5 else 50


def relocation_support(company: CompanyProfile) -> int:
    score = 50
    for attr, bonus in _RELOCATION_BONUSES:
        if getattr(company, attr):
            score += bonus
    return min(100, score)


def communication_quality(company: CompanyProfile) -> int:
    if company.email_response_hours is None:
        return 70
    return 90 if company.email_response_hours < 24 else 60


def industry_match(company: CompanyProfile) -> int:
    return 90 if company.industry in TARGET_INDUSTRIES else 70


def size_compatibility(company: CompanyProfile) -> int:
    return _SIZE_SCORES.get(company.size or "", 75)


def lead_reasons(sub_scores: Mapping[str, int], company: CompanyProfile | None = None) -> list[str]:
    """Human-readable reasons for every strong sub-score."""
    reasons = [text for name, text in _REASONS if sub_scores.get(name, 0) > 80]
    if not reasons and company is not None and _limited_data(company):
        reasons.append(LIMITED_DATA_REASON)
    return reasons


def _limited_data(company: CompanyProfile) -> bool:
    return (
        company.revenue is None
        and company.open_positions is None
        and company.email_response_hours is None
    )


def score_lead(company: CompanyProfile, weights: LeadWeights | None = None) -> LeadScore:
    """Score a company as a recruitment lead. Qualification is up to the caller."""
    weights = weights or LeadWeights()
    sub_scores = {
        "financial_health": financial_health(company),
        "hiring_urgency": hiring_urgency(company),
        "relocation_support": relocation_support(company),
        "communication_quality": communication_quality(company),
        "industry_match": industry_match(company),
        "size_compatibility": size_compatibility(company),
    }
    overall = Ensemble(weights.as_table()).overall(sub_scores)
    logger.debug("Lead %s scored %d", company.id, overall)
    return LeadScore(
        company_id=company.id,
        overall_fit=overall,
        reasons=lead_reasons(sub_scores, company),
        **sub_scores,
    )
