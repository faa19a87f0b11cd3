"""User-facing output: summary, recommended actions and red flags.

Template-based rules, no model involved. Every string is fixed so callers and
UIs can match on it.
"""

import logging

from models.schemas.profiles import EntityProfile
from services.factors import SkillsGap, compensation_ratio, experience_pair, relocation_refused

logger = logging.getLogger(__name__)

SALARY_RED_FLAG = "Salary expectations significantly higher than offered"
RELOCATION_RED_FLAG = "Not willing to relocate"
EXPERIENCE_RED_FLAG = "Significant experience gap"


def fit_quality(score: int) -> str:
    if score >= 80:
        return "strong"
    if score >= 60:
        return "moderate"
    if score >= 40:
        return "partial"
    return "weak"


def build_summary(score: int, confidence: int, gap: SkillsGap, degraded: bool = False) -> str:
    """Short 1-3 sentence summary of a match."""
    parts = [f"Overall match score: {score}/100 ({fit_quality(score)} fit)."]

    if gap.missing_skills:
        parts.append(f"{len(gap.missing_skills)} required skills missing.")
    elif not gap.gaps:
        parts.append("No gaps detected against the opportunity requirements.")

    if degraded:
        parts.append("Text similarity was unavailable and scored as neutral.")
    elif confidence < 100:
        parts.append(f"Confidence {confidence}/100 due to incomplete profile data.")

    return " ".join(parts)


def recommended_actions(score: int, gap: SkillsGap | None = None) -> list[str]:
    if score >= 80:
        actions = ["Schedule interview immediately", "Fast-track screening process"]
    elif score >= 60:
        actions = ["Conduct technical assessment", "Verify references and background"]
    else:
        actions = ["Consider skill development programs", "Explore alternative positions in company"]

    if gap is not None:
        if gap.missing_skills:
            actions.append(f"Offer targeted training for: {', '.join(gap.missing_skills)}")
        elif gap.gaps:
            actions.append("Offer training and mentorship programs")
    return actions


def red_flags(candidate: EntityProfile, opportunity: EntityProfile) -> list[str]:
    flags: list[str] = []

    ratio = compensation_ratio(candidate, opportunity)
    if ratio is not None and ratio > 1.5:
        flags.append(SALARY_RED_FLAG)

    if relocation_refused(candidate, opportunity):
        flags.append(RELOCATION_RED_FLAG)

    cand, req = experience_pair(candidate, opportunity)
    if cand is not None and req is not None and req > cand * 1.5:
        flags.append(EXPERIENCE_RED_FLAG)

    if flags:
        logger.debug("Red flags for %s -> %s: %s", candidate.id, opportunity.id, flags)
    return flags
