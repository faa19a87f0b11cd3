"""Tests for the weighted ensemble and weight configuration."""

import pytest
from pydantic import ValidationError

from config import AdvancedWeights, ConfidencePenalties, LeadWeights, MatchWeights, _WeightTable
from services.ensemble import Ensemble


class TestEnsembleCombine:
    def setup_method(self):
        penalties = ConfidencePenalties()
        self.ensemble = Ensemble(MatchWeights().as_table(), penalties.as_table(), penalties.floor)

    def test_scenario_factors(self):
        factors = {
            "skill_similarity": 100,
            "experience_fit": 100,
            "location_fit": 100,
            "cultural_fit": 90,
            "language_fit": 90,
            "compensation_fit": 100,
        }
        result = self.ensemble.combine(factors)
        assert result.overall == 97
        assert result.confidence == 100

    def test_missing_factor_counts_as_neutral(self):
        assert self.ensemble.overall({}) == 50
        assert self.ensemble.overall({"skill_similarity": 90}) == 60  # 22.5 + 0.75 * 50

    def test_unknown_factors_ignored(self):
        assert self.ensemble.overall({"not_a_factor": 100}) == 50

    def test_deterministic(self):
        factors = {"skill_similarity": 37, "experience_fit": 81, "language_fit": 12}
        assert self.ensemble.combine(factors, ["profile_text"]) == self.ensemble.combine(
            factors, ["profile_text"]
        )

    def test_confidence_penalties(self):
        assert self.ensemble.confidence(["profile_text"]) == 80
        assert self.ensemble.confidence(["application_history"]) == 85
        assert self.ensemble.confidence(["opportunity_embedding"]) == 90

    def test_confidence_floor(self):
        missing = ["profile_text", "application_history", "opportunity_embedding"]
        assert self.ensemble.confidence(missing) == 60

    def test_bounded(self):
        assert self.ensemble.overall({name: 100 for name in self.ensemble.weights}) == 100
        assert self.ensemble.overall({name: 0 for name in self.ensemble.weights}) == 0


class TestWeightTables:
    def test_defaults_sum_to_one(self):
        for table in (MatchWeights(), AdvancedWeights(), LeadWeights()):
            assert sum(table.as_table().values()) == pytest.approx(1.0)

    def test_camel_case_alias(self):
        weights = MatchWeights(culturalFit=0.10, compensation=0.15)
        assert weights.cultural_fit == 0.10

    def test_bad_sum_rejected(self):
        with pytest.raises(ValidationError):
            MatchWeights(skill=0.9)

    def test_ensemble_rejects_bad_sum(self):
        with pytest.raises(ValueError):
            Ensemble({"a": 0.5, "b": 0.2})

    def test_ensemble_rejects_empty_table(self):
        with pytest.raises(ValueError):
            Ensemble({})

    def test_every_field_mapped(self):
        for table in (MatchWeights(), AdvancedWeights(), LeadWeights()):
            assert sorted(table.as_table().values()) == sorted(table.model_dump().values())
            assert len(table.as_table()) == len(type(table).model_fields)

    def test_base_table_has_no_mapping(self):
        assert not hasattr(_WeightTable, "as_table")
