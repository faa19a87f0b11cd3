"""Tests for company lead qualification."""

import pytest

from models.schemas import CompanyProfile
from services import lead_qualifier


def _company(**kwargs) -> CompanyProfile:
    kwargs.setdefault("id", "co-1")
    return CompanyProfile(**kwargs)


class TestSubScores:
    def test_relocation_support_scenario(self):
        company = CompanyProfile.model_validate({
            "id": "co-1",
            "offersRelocation": True,
            "providesHousing": True,
            "helpsWithVisa": False,
            "transportSupport": False,
            "languageTraining": False,
        })
        assert lead_qualifier.relocation_support(company) == 90

    def test_relocation_support_capped(self):
        company = _company(
            offers_relocation=True,
            provides_housing=True,
            helps_with_visa=True,
            transport_support=True,
            language_training=True,
        )
        assert lead_qualifier.relocation_support(company) == 100

    @pytest.mark.parametrize(
        "revenue, expected",
        [(None, 50), (0, 0), (2_000_000, 40), (4_250_000, 85), (50_000_000, 100)],
    )
    def test_financial_health(self, revenue, expected):
        assert lead_qualifier.financial_health(_company(revenue=revenue)) == expected

    def test_hiring_urgency(self):
        assert lead_qualifier.hiring_urgency(_company(open_positions=6)) == 80
        assert lead_qualifier.hiring_urgency(_company(open_positions=5)) == 50
        assert lead_qualifier.hiring_urgency(_company()) == 50

    def test_communication_quality(self):
        assert lead_qualifier.communication_quality(_company(email_response_hours=4)) == 90
        assert lead_qualifier.communication_quality(_company(email_response_hours=24)) == 60
        assert lead_qualifier.communication_quality(_company()) == 70

    def test_industry_and_size(self):
        assert lead_qualifier.industry_match(_company(industry="Forestry")) == 90
        assert lead_qualifier.industry_match(_company(industry="retail")) == 70
        assert lead_qualifier.size_compatibility(_company(size="large")) == 95
        assert lead_qualifier.size_compatibility(_company(size="medium")) == 85
        assert lead_qualifier.size_compatibility(_company(size="small")) == 70
        assert lead_qualifier.size_compatibility(_company()) == 75


class TestScoreLead:
    def test_strong_lead(self):
        company = _company(
            revenue=10_000_000,
            open_positions=12,
            offers_relocation=True,
            provides_housing=True,
            email_response_hours=2,
            industry="agriculture",
            size="large",
        )
        lead = lead_qualifier.score_lead(company)
        # 100*.25 + 80*.2 + 90*.2 + 90*.15 + 90*.1 + 95*.1 = 91
        assert lead.overall_fit == 91
        assert lead.reasons == (
            "Strong financial position",
            "Good relocation support",
            "Industry fits recruitment profile",
            "Fast, responsive communication",
        )

    def test_limited_data(self):
        lead = lead_qualifier.score_lead(_company(size="small"))
        # 50*.25 + 50*.2 + 50*.2 + 70*.15 + 70*.1 + 70*.1 = 57
        assert lead.overall_fit == 57
        assert lead.reasons == ("Score calculated with limited data",)

    def test_weak_lead_with_data_has_no_reasons(self):
        lead = lead_qualifier.score_lead(_company(revenue=1_000_000, open_positions=1))
        assert lead.reasons == ()

    def test_sub_scores_round_trip(self):
        lead = lead_qualifier.score_lead(_company(size="medium"))
        assert lead.sub_scores()["size_compatibility"] == 85
