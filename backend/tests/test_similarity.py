import math

import pytest

from services.score_utils import clamp_score, round_half_up
from services.similarity import cosine_score, cosine_similarity


def test_cosine_score_identical_vectors():
    vec = [0.3, -1.2, 4.0, 0.0]
    assert cosine_score(vec, vec) == 100


def test_cosine_score_opposite_vectors():
    assert cosine_score([1.0, 2.0], [-1.0, -2.0]) == 0


def test_cosine_score_orthogonal_is_midpoint():
    assert cosine_score([1.0, 0.0], [0.0, 1.0]) == 50


def test_cosine_score_symmetric():
    a = [0.1, 0.9, -0.4, 2.2]
    b = [1.5, -0.3, 0.8, 0.1]
    assert cosine_score(a, b) == cosine_score(b, a)


@pytest.mark.parametrize(
    "a, b",
    [
        (None, [1.0, 2.0]),
        ([1.0, 2.0], None),
        ([], []),
        ([0.0, 0.0], [1.0, 2.0]),
        ([1.0, 2.0, 3.0], [1.0, 2.0]),
        ([math.nan, 1.0], [1.0, 1.0]),
        ([math.inf, 1.0], [1.0, 1.0]),
    ],
)
def test_cosine_score_undefined_pairs_are_neutral(a, b):
    assert cosine_score(a, b) == 50


def test_cosine_similarity_returns_none_for_mismatch():
    assert cosine_similarity([1.0], [1.0, 0.0]) is None


class TestScoreUtils:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(97.5) == 98
        assert round_half_up(2.4999) == 2

    def test_clamp_bounds(self):
        assert clamp_score(-12.0) == 0
        assert clamp_score(140.2) == 100
        assert clamp_score(64.5) == 65

    def test_clamp_non_finite_is_neutral(self):
        assert clamp_score(math.nan) == 50
        assert clamp_score(math.inf) == 50
