"""Weighted ensemble: named factor scores -> overall score + confidence."""

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from services.score_utils import NEUTRAL_SCORE, clamp_score

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_FLOOR = 60


class EnsembleScore(NamedTuple):
    overall: int
    confidence: int


class Ensemble:
    """Fixed-weight combiner.

    A weighted factor absent from the input counts as the neutral score;
    factors outside the weight table are ignored. Confidence starts at 100
    and loses the configured penalty for every missing optional input, never
    dropping below ``floor``.
    """

    def __init__(
        self,
        weights: Mapping[str, float],
        penalties: Mapping[str, int] | None = None,
        floor: int = DEFAULT_CONFIDENCE_FLOOR,
    ) -> None:
        if not weights:
            raise ValueError("Ensemble needs at least one weighted factor")
        total = sum(weights.values())
        if abs(total - 1.0) > 1e-3:
            raise ValueError(f"Ensemble weights must sum to 1.0, got {total:.3f}")
        self.weights = dict(weights)
        self.penalties = dict(penalties or {})
        self.floor = floor

    def overall(self, factors: Mapping[str, int]) -> int:
        total = sum(
            weight * factors.get(name, NEUTRAL_SCORE)
            for name, weight in self.weights.items()
        )
        return clamp_score(total)

    def confidence(self, missing: Iterable[str] = ()) -> int:
        penalty = sum(self.penalties.get(name, 0) for name in set(missing))
        return max(self.floor, min(100, 100 - penalty))

    def combine(self, factors: Mapping[str, int], missing: Iterable[str] = ()) -> EnsembleScore:
        missing = tuple(missing)
        result = EnsembleScore(self.overall(factors), self.confidence(missing))
        logger.debug(
            "Ensemble combine: overall=%d confidence=%d missing=%s",
            result.overall, result.confidence, ",".join(missing) or "-",
        )
        return result
