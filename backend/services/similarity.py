"""Embedding similarity rescaled to a 0-100 factor score."""

import logging
from collections.abc import Sequence

import numpy as np

from services.score_utils import NEUTRAL_SCORE, clamp_score

logger = logging.getLogger(__name__)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float | None:
    """Raw cosine in [-1, 1], or None when it is undefined for the pair."""
    if vec_a is None or vec_b is None:
        return None
    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    if a.ndim != 1 or a.shape != b.shape or a.size == 0:
        return None
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return None

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return None
    cos = float(np.dot(a, b) / (norm_a * norm_b))
    if not np.isfinite(cos):
        return None
    return max(-1.0, min(1.0, cos))


def cosine_score(vec_a: Sequence[float] | None, vec_b: Sequence[float] | None) -> int:
    """Cosine similarity mapped from [-1, 1] onto [0, 100].

    Missing, zero-norm or mismatched-length vectors score the neutral 50.
    """
    cos = cosine_similarity(vec_a, vec_b)
    if cos is None:
        if vec_a is not None and vec_b is not None and len(vec_a) != len(vec_b):
            logger.debug("Embedding length mismatch (%d vs %d)", len(vec_a), len(vec_b))
        return NEUTRAL_SCORE
    return clamp_score(((cos + 1) / 2) * 100)
