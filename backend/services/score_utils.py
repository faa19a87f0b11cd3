"""Rounding and clamping shared by every scorer.

Scores are rounded half-up (2.5 -> 3) rather than with Python's banker's
rounding so identical inputs land on the documented band edges.
"""

import math

NEUTRAL_SCORE = 50


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    """Round to an int in [low, high]; NaN/inf resolve to the neutral score."""
    if value is None or not math.isfinite(value):
        return NEUTRAL_SCORE
    return max(low, min(high, round_half_up(value)))
