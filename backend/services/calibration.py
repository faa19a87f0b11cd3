"""Historical calibration and placement-success prediction."""

from collections.abc import Mapping, Sequence

import numpy as np

from models.schemas.match_result import MatchResult
from models.schemas.profiles import HistoricalRecord
from services.score_utils import NEUTRAL_SCORE, clamp_score

CALIBRATION_WINDOW = 10.0
RAW_WEIGHT = 0.8
HISTORY_WEIGHT = 0.2

# Success prediction from the basic factors alone
_PLACEMENT_WEIGHTS = {
    "skill_similarity": 0.25,
    "experience_fit": 0.25,
    "cultural_fit": 0.20,
    "language_fit": 0.15,
    "location_fit": 0.10,
    "compensation_fit": 0.05,
}

# Success rate: overall score plus the factors that predict retention
_SUCCESS_RATE_WEIGHTS = {
    "skill_similarity": 0.25,
    "experience_fit": 0.20,
    "location_fit": 0.10,
    "cultural_fit": 0.10,
    "language_fit": 0.05,
}
_SUCCESS_RATE_OVERALL_WEIGHT = 0.30


def calibration_window(raw: float, history: Sequence[HistoricalRecord]) -> list[HistoricalRecord]:
    """Records whose overall score is strictly less than the window away from ``raw``."""
    return [r for r in history if abs(r.overall_score - raw) < CALIBRATION_WINDOW]


def _history_term(score: float, history: Sequence[HistoricalRecord]) -> float:
    similar = calibration_window(score, history)
    return float(np.mean([r.actual_success for r in similar])) if similar else float(NEUTRAL_SCORE)


def calibrate(raw: float, history: Sequence[HistoricalRecord] = ()) -> float:
    """Blend a raw score with the real outcomes of similarly scored matches.

    With no comparable history the adjustment term is the neutral 50, so
    ``calibrate(x, [])`` is ``0.8x + 10``.
    """
    return max(0.0, min(100.0, RAW_WEIGHT * raw + HISTORY_WEIGHT * _history_term(raw, history)))


def _weighted(factors: Mapping[str, int], weights: Mapping[str, float]) -> float:
    return sum(weight * factors.get(name, NEUTRAL_SCORE) for name, weight in weights.items())


def predict_placement_success(factors: Mapping[str, int]) -> int:
    return clamp_score(_weighted(factors, _PLACEMENT_WEIGHTS))


def predict_success_rate(match: MatchResult, history: Sequence[HistoricalRecord] | None = None) -> int:
    """Weighted success rate, blended with the outcomes of past matches that
    had a similar overall score (the window is centred on ``overall_score``,
    not on the success rate itself).
    """
    raw = _SUCCESS_RATE_OVERALL_WEIGHT * match.overall_score + _weighted(match.factors, _SUCCESS_RATE_WEIGHTS)
    if history:
        raw = RAW_WEIGHT * raw + HISTORY_WEIGHT * _history_term(match.overall_score, history)
    return clamp_score(raw)
