"""Tests for profile validation and normalisation."""

import pytest
from pydantic import ValidationError

from models.schemas import CompanyProfile, EntityProfile, ExperienceLevel, LanguageLevel


class TestEntityProfile:
    def test_camel_case_and_snake_case(self):
        a = EntityProfile.model_validate({"id": "c", "willingToRelocate": True, "experienceLevel": "Expert"})
        b = EntityProfile(id="c", willing_to_relocate=True, experience_level=4)
        assert a.willing_to_relocate and b.willing_to_relocate
        assert a.experience_level == b.experience_level == ExperienceLevel.EXPERT

    def test_unknown_levels_are_neutral(self):
        profile = EntityProfile(id="c", experience_level="guru", languages={"English": "superb", "German": "B"})
        assert profile.experience_level is None
        assert profile.languages == {}

    def test_languages_normalised(self):
        profile = EntityProfile(id="c", languages={" English ": "Proficient", "danish": 1})
        assert profile.languages == {"english": LanguageLevel.FLUENT, "danish": LanguageLevel.BASIC}

    def test_languages_must_be_a_mapping(self):
        with pytest.raises(ValidationError):
            EntityProfile(id="c", languages=[1, 2])

    def test_skills_must_be_a_list(self):
        with pytest.raises(ValidationError):
            EntityProfile(id="c", skills=5)

    def test_comma_separated_skills(self):
        assert EntityProfile(id="c", skills="chainsaw, first aid,").skills == ["chainsaw", "first aid"]

    def test_codes_upper_cased(self):
        profile = EntityProfile(id="c", country=" dk ", compensation={"amount": 100, "currency": "eur"})
        assert profile.country == "DK"
        assert profile.compensation.currency == "EUR"

    def test_frozen(self):
        profile = EntityProfile(id="c")
        with pytest.raises(ValidationError):
            profile.country = "DE"

    def test_missing_id(self):
        with pytest.raises(ValidationError):
            EntityProfile(description="no id")


def test_company_terms_lower_cased():
    company = CompanyProfile(id="co", industry=" Forestry ", size="LARGE")
    assert company.industry == "forestry"
    assert company.size == "large"
