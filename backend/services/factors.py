"""Factor scorers: one 0-100 sub-score per dimension of fit.

Every scorer is a total, side-effect-free function of the two profile
snapshots (plus precomputed similarity scores where embeddings are involved).
Missing optional attributes resolve to the neutral default listed next to
each scorer; nothing here raises for well-formed profiles.

Basic ensemble factors:
    skill_similarity, experience_fit, location_fit, cultural_fit,
    language_fit, compensation_fit
Advanced ensemble factors:
    neural_similarity, behavioral_pattern, career_trajectory,
    risk_assessment (inverted before combining), market_value_alignment,
    retention_likelihood
"""

import logging
from collections.abc import Mapping

import numpy as np
from pydantic import BaseModel

from models.schemas.profiles import (
    ApplicationStatus,
    EntityProfile,
    ExperienceLevel,
    LanguageLevel,
)
from services.score_utils import NEUTRAL_SCORE, clamp_score, round_half_up

logger = logging.getLogger(__name__)

# Job categories that share an industry for history/preference comparisons
INDUSTRY_ALIASES: dict[str, str] = {
    "forestry": "forest",
    "logging": "forest",
    "agriculture": "farm",
    "greenhouse": "horticulture",
    "fruit_harvesting": "harvest",
    "animal_care": "animal",
    "tree_planting": "planting",
    "park_maintenance": "maintenance",
}

# How much the local language matters per destination market
LANGUAGE_IMPORTANCE_BY_COUNTRY: dict[str, str] = {
    "DK": "high",
    "DENMARK": "high",
    "DE": "medium",
    "GERMANY": "medium",
    "NL": "medium",
    "NETHERLANDS": "medium",
    "FR": "medium",
    "FRANCE": "medium",
}

_LANGUAGE_SCORES: dict[LanguageLevel, int] = {
    LanguageLevel.NATIVE: 100,
    LanguageLevel.FLUENT: 90,
    LanguageLevel.ADVANCED: 85,
    LanguageLevel.INTERMEDIATE: 70,
}

# Market value weights (job side)
_EXPERIENCE_WEIGHT: dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 30,
    ExperienceLevel.INTERMEDIATE: 50,
    ExperienceLevel.ADVANCED: 70,
    ExperienceLevel.EXPERT: 90,
}
_SALARY_BAND_WEIGHT: dict[str, int] = {"low": 20, "standard": 40, "high": 60, "premium": 80}

# Advanced "neural" similarity: facet weights + historical performance
NEURAL_FACET_WEIGHTS: dict[str, float] = {
    "skills": 0.35,
    "experience": 0.25,
    "culture": 0.20,
    "market": 0.15,
}
NEURAL_HISTORY_WEIGHT = 0.05
HISTORY_WINDOW = 10

FAST_RESPONSE_HOURS = 24.0


class SkillsGap(BaseModel):
    gaps: list[str] = []
    opportunities: list[str] = []
    missing_skills: list[str] = []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def normalize_industry(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    key = value.strip().lower().replace(" ", "_").replace("-", "_")
    return INDUSTRY_ALIASES.get(key, key)


def _same_text(a: str | None, b: str | None) -> bool:
    return bool(a and b and a.strip().lower() == b.strip().lower())


def relocation_required(candidate: EntityProfile, opportunity: EntityProfile) -> bool:
    """True when both countries are known and differ."""
    return bool(candidate.country and opportunity.country and candidate.country != opportunity.country)


def relocation_refused(candidate: EntityProfile, opportunity: EntityProfile) -> bool:
    return relocation_required(candidate, opportunity) and not candidate.willing_to_relocate


def experience_pair(
    candidate: EntityProfile, opportunity: EntityProfile
) -> tuple[float | None, float | None]:
    """(candidate, required) experience on a common scale.

    Years are used when both sides state them, otherwise the ordinal levels.
    """
    if candidate.experience_years is not None and opportunity.experience_years is not None:
        return candidate.experience_years, opportunity.experience_years
    cand = float(candidate.experience_level) if candidate.experience_level is not None else None
    req = float(opportunity.experience_level) if opportunity.experience_level is not None else None
    return cand, req


def language_importance(opportunity: EntityProfile) -> str:
    if opportunity.language_importance:
        return opportunity.language_importance
    return LANGUAGE_IMPORTANCE_BY_COUNTRY.get(opportunity.country or "", "medium")


def compensation_ratio(candidate: EntityProfile, opportunity: EntityProfile) -> float | None:
    """expected / offered, or None when the two are not comparable."""
    expected = candidate.compensation
    offered = opportunity.compensation
    if expected is None or offered is None:
        return None
    if expected.currency != offered.currency:
        logger.debug(
            "Compensation currencies differ (%s vs %s); not comparable",
            expected.currency, offered.currency,
        )
        return None
    if expected.amount <= 0 or offered.amount <= 0:
        return None
    return expected.amount / offered.amount


# ---------------------------------------------------------------------------
# Basic ensemble factors
# ---------------------------------------------------------------------------

def experience_fit(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    """100 at or above requirement, 80 from 80%, 60 from 50%, else ratio with floor 20.

    Neutral: 100 when nothing is required, 50 when the candidate's experience is unknown.
    """
    cand, req = experience_pair(candidate, opportunity)
    if req is None or req <= 0:
        return 100
    if cand is None:
        return NEUTRAL_SCORE

    ratio = cand / req
    if ratio >= 1.0:
        return 100
    if ratio >= 0.8:
        return 80
    if ratio >= 0.5:
        return 60
    return max(20, clamp_score(ratio * 100))


def location_fit(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    if not candidate.country or not opportunity.country:
        return NEUTRAL_SCORE
    if candidate.country == opportunity.country:
        return 100
    if not candidate.willing_to_relocate:
        return 30
    return 85


def cultural_fit(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    score = 70
    cand_tags = {t.lower() for t in candidate.culture_tags}
    opp_tags = {t.lower() for t in opportunity.culture_tags}
    if cand_tags & opp_tags:
        score += 20
    if _same_text(candidate.motivation, opportunity.company_values):
        score += 10
    return max(40, min(100, score))


def language_fit(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    level = candidate.languages.get(opportunity.required_language)
    if level is None or level == LanguageLevel.NONE:
        return NEUTRAL_SCORE
    if level == LanguageLevel.BASIC:
        return 40 if language_importance(opportunity) == "high" else 60
    return _LANGUAGE_SCORES[level]


def compensation_fit(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    ratio = compensation_ratio(candidate, opportunity)
    if ratio is None:
        return NEUTRAL_SCORE
    if ratio <= 1.0:
        return 100
    if ratio <= 1.2:
        return 80
    if ratio <= 1.5:
        return 60
    return max(20, clamp_score(100 / ratio))


# ---------------------------------------------------------------------------
# Advanced ensemble factors
# ---------------------------------------------------------------------------

def historical_risk(candidate: EntityProfile) -> float:
    """0-20 points proportional to the share of rejected or withdrawn applications."""
    history = candidate.history
    if not history:
        return 0.0
    failed = sum(
        1 for app in history
        if app.status in (ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN)
    )
    return failed / len(history) * 20


def risk_assessment(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    """Additive risk (higher is riskier), capped at 100."""
    risk = 0.0
    if relocation_refused(candidate, opportunity):
        risk += 30

    if candidate.experience_level is not None and opportunity.experience_level is not None:
        if opportunity.experience_level - candidate.experience_level > 1:
            risk += 20

    required = opportunity.required_language_level
    if required is not None:
        proficiency = candidate.languages.get(opportunity.required_language, LanguageLevel.NONE)
        if required > proficiency:
            risk += 25

    risk += historical_risk(candidate)
    return clamp_score(risk)


def behavioral_pattern(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    history = candidate.history
    if not history:
        return 60

    total = len(history)
    accepted = sum(1 for app in history if app.status == ApplicationStatus.ACCEPTED) / total
    withdrawn = sum(1 for app in history if app.status == ApplicationStatus.WITHDRAWN) / total

    # Unknown response times count as the slow bucket
    response_times = [app.response_hours for app in history if app.response_hours is not None]
    speed = 20 if response_times and float(np.mean(response_times)) <= FAST_RESPONSE_HOURS else 10

    industry = normalize_industry(opportunity.industry)
    same_industry = 0.0
    if industry:
        same_industry = sum(
            1 for app in history if normalize_industry(app.industry) == industry
        ) / total

    return clamp_score(accepted * 40 + (1 - withdrawn) * 30 + speed + same_industry * 10)


def career_trajectory(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    score = 75
    if (
        candidate.experience_level is not None
        and candidate.experience_level == opportunity.experience_level
    ):
        score += 15
    if any(app.status == ApplicationStatus.ACCEPTED for app in candidate.history):
        score += 10
    preferred = normalize_industry(candidate.preferred_industry)
    if preferred and preferred == normalize_industry(opportunity.industry):
        score += 10
    return min(100, score)


def market_value_alignment(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    """100 minus the distance between candidate and job market value."""
    if candidate.experience_level is None:
        return NEUTRAL_SCORE
    candidate_value = int(candidate.experience_level) * 20 + len(candidate.history) * 5
    job_value = (
        _EXPERIENCE_WEIGHT.get(opportunity.experience_level, 50)
        + _SALARY_BAND_WEIGHT.get((opportunity.salary_band or "standard").lower(), 40)
    )
    return clamp_score(100 - abs(candidate_value - job_value))


def retention_likelihood(candidate: EntityProfile, opportunity: EntityProfile) -> int:
    preferred_industry = normalize_industry(candidate.preferred_industry)
    factors = {
        "stable_history": 85 if len(candidate.history) > 3 else 60,
        "industry": 90 if preferred_industry and preferred_industry == normalize_industry(opportunity.industry) else 70,
        "location": 95 if candidate.preferred_location and candidate.preferred_location == opportunity.country else 75,
        "contract": 85 if _same_text(candidate.preferred_contract_type, opportunity.contract_type) else 65,
        "company_size": 80 if _same_text(candidate.preferred_company_size, opportunity.company_size) else 60,
    }
    return round_half_up(
        factors["stable_history"] * 0.25
        + factors["industry"] * 0.20
        + factors["location"] * 0.20
        + factors["contract"] * 0.20
        + factors["company_size"] * 0.15
    )


def historical_performance(candidate: EntityProfile) -> float:
    """Mean score over the last applications (unknown scores count as 50)."""
    recent = candidate.history[-HISTORY_WINDOW:]
    if not recent:
        return float(NEUTRAL_SCORE)
    return float(np.mean([app.score if app.score is not None else NEUTRAL_SCORE for app in recent]))


def neural_facet_texts(
    candidate: EntityProfile, opportunity: EntityProfile
) -> dict[str, tuple[str, str]]:
    """Per-facet (candidate text, opportunity text) pairs to embed and compare."""

    def _level(profile: EntityProfile) -> str:
        parts = []
        if profile.experience_level is not None:
            parts.append(f"experience level {profile.experience_level.name.lower()}")
        if profile.experience_years is not None:
            parts.append(f"{profile.experience_years:g} years experience")
        return " ".join(parts)

    return {
        "skills": (
            " ".join([candidate.description, *candidate.skills]).strip(),
            " ".join([opportunity.description, *opportunity.required_skills]).strip(),
        ),
        "experience": (_level(candidate), _level(opportunity)),
        "culture": (
            " ".join([*candidate.culture_tags, candidate.motivation or ""]).strip(),
            " ".join([*opportunity.culture_tags, opportunity.company_values or ""]).strip(),
        ),
        "market": (
            " ".join(filter(None, [candidate.preferred_industry, candidate.preferred_location, candidate.country])),
            " ".join(filter(None, [opportunity.industry, opportunity.country, opportunity.salary_band])),
        ),
    }


def neural_similarity(facet_scores: Mapping[str, int], history_mean: float = NEUTRAL_SCORE) -> int:
    """Fixed-weight blend of facet cosine scores plus historical performance.

    Facets without a score count as neutral.
    """
    total = sum(
        weight * facet_scores.get(facet, NEUTRAL_SCORE)
        for facet, weight in NEURAL_FACET_WEIGHTS.items()
    )
    total += NEURAL_HISTORY_WEIGHT * history_mean
    return clamp_score(total)


# ---------------------------------------------------------------------------
# Skills gap
# ---------------------------------------------------------------------------

def skills_gap(candidate: EntityProfile, opportunity: EntityProfile) -> SkillsGap:
    gaps: list[str] = []
    opportunities: list[str] = []

    if (
        candidate.experience_level is not None
        and opportunity.experience_level is not None
        and candidate.experience_level < opportunity.experience_level
    ):
        gaps.append("Experience level below requirement")
        opportunities.append("Provide training program")

    industry = normalize_industry(opportunity.industry)
    if industry and not any(normalize_industry(app.industry) == industry for app in candidate.history):
        gaps.append("No experience in this industry")
        opportunities.append("Mentorship and industry-specific training")

    have = {s.lower() for s in candidate.skills}
    missing = [s for s in opportunity.required_skills if s.lower() not in have]
    if missing:
        gaps.extend(f"Missing skill: {s}" for s in missing)
        opportunities.append(f"Training in {', '.join(missing[:5])}")

    return SkillsGap(gaps=gaps, opportunities=opportunities, missing_skills=missing)
