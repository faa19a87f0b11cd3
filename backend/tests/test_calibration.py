"""Tests for historical calibration and success prediction."""

import pytest

from models.schemas import HistoricalRecord, MatchResult
from services import calibration


def _records(*pairs):
    return [HistoricalRecord(overall_score=s, actual_success=a) for s, a in pairs]


class TestCalibrate:
    def test_scenario(self):
        history = _records((70, 60), (72, 65), (80, 90))
        assert calibration.calibrate(75, history) == pytest.approx(0.8 * 75 + 0.2 * (215 / 3))
        assert calibration.calibrate(75, history) == pytest.approx(74.33, abs=0.01)

    @pytest.mark.parametrize("raw", [0, 12.5, 50, 87, 100])
    def test_empty_history(self, raw):
        assert calibration.calibrate(raw, []) == pytest.approx(min(100, 0.8 * raw + 10))

    def test_window_edges_excluded(self):
        history = _records((60, 100), (80, 100), (61, 0), (79.5, 40))
        assert calibration.calibration_window(95, history) == []
        assert calibration.calibration_window(70, history) == _records((61, 0), (79.5, 40))
        # records exactly 10 away do not count
        assert calibration.calibrate(70, _records((80, 100))) == pytest.approx(66.0)

    def test_records_outside_window_ignored(self):
        history = _records((20, 0), (95, 100))
        assert calibration.calibrate(90, history) == pytest.approx(0.8 * 90 + 0.2 * 100)

    def test_bounded(self):
        assert 0 <= calibration.calibrate(100, _records((100, 100))) <= 100
        assert calibration.calibrate(0, _records((0, 0))) == 0


class TestSuccessPrediction:
    def test_placement_success(self):
        factors = {
            "skill_similarity": 100,
            "experience_fit": 100,
            "cultural_fit": 100,
            "language_fit": 100,
            "location_fit": 100,
            "compensation_fit": 100,
        }
        assert calibration.predict_placement_success(factors) == 100
        assert calibration.predict_placement_success({}) == 50

    def test_success_rate(self):
        match = MatchResult(
            candidate_id="c",
            opportunity_id="o",
            overall_score=80,
            factors={
                "skill_similarity": 80,
                "experience_fit": 80,
                "location_fit": 80,
                "cultural_fit": 80,
                "language_fit": 80,
            },
        )
        assert calibration.predict_success_rate(match) == 80

    def test_success_rate_calibrated(self):
        match = MatchResult(candidate_id="c", opportunity_id="o", overall_score=50)
        # raw 50; history mean 90 inside the window -> 0.8*50 + 0.2*90 = 58
        assert calibration.predict_success_rate(match, _records((55, 90))) == 58

    def test_success_rate_window_centred_on_overall_score(self):
        match = MatchResult(
            candidate_id="c",
            opportunity_id="o",
            overall_score=80,
            factors={
                "skill_similarity": 20,
                "experience_fit": 20,
                "location_fit": 20,
                "cultural_fit": 20,
                "language_fit": 20,
            },
        )
        # raw 0.3*80 + 0.7*20 = 38; the 80 -> 100 record matches the overall score
        # 0.8*38 + 0.2*100 = 50.4
        assert calibration.predict_success_rate(match, _records((80, 100))) == 50
        # a record near the raw rate but far from the overall score is ignored
        assert calibration.predict_success_rate(match, _records((38, 100))) == 40
