"""Scoring inputs: candidate/opportunity profiles, companies and history.

Every record is a frozen pydantic model so a profile snapshot can be shared
between concurrent scoring calls. Only ``id`` is required; all other fields
are optional and resolve to neutral defaults inside the factor scorers.
"""

import logging
from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

EntityId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ExperienceLevel(IntEnum):
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4


class LanguageLevel(IntEnum):
    NONE = 0
    BASIC = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    FLUENT = 4
    NATIVE = 5


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


_LEVEL_ALIASES = {"proficient": "fluent"}


def parse_level(enum_cls: type[IntEnum], value: Any) -> IntEnum | None:
    """Parse an ordinal from its name (any case) or its integer value.

    Unrecognised values return None so they fall back to the neutral default.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if not key:
            return None
        if key.isdigit():
            value = int(key)
        else:
            key = _LEVEL_ALIASES.get(key, key)
            try:
                return enum_cls[key.upper()]
            except KeyError:
                logger.debug("Ignoring unknown %s: %r", enum_cls.__name__, value)
                return None
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        logger.debug("Ignoring unknown %s: %r", enum_cls.__name__, value)
        return None


def _clean_code(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text.upper() or None


class Compensation(BaseModel):
    """Expected (candidate) or offered (opportunity) pay."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    amount: float = Field(..., ge=0)
    currency: str = "EUR"

    @field_validator("currency", mode="before")
    @classmethod
    def _upper_currency(cls, value: Any) -> str:
        return _clean_code(value) or "EUR"


class ApplicationRecord(BaseModel):
    """One past application or placement outcome of a candidate."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    status: ApplicationStatus = ApplicationStatus.PENDING
    industry: str | None = None
    response_hours: float | None = Field(None, ge=0)  # time to respond to the employer
    score: float | None = Field(None, ge=0, le=100)  # overall score computed at the time

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class EntityProfile(BaseModel):
    """A candidate or an opportunity (job).

    Candidate-only and opportunity-only attributes share one record; each
    scorer reads the side it needs and ignores the rest.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: EntityId
    description: str = ""

    experience_level: ExperienceLevel | None = None
    experience_years: float | None = Field(None, ge=0)

    country: str | None = None
    willing_to_relocate: bool = False
    preferred_location: str | None = None

    languages: dict[str, LanguageLevel] = {}
    required_language: str = "english"
    required_language_level: LanguageLevel | None = None
    language_importance: Literal["high", "medium", "low"] | None = None

    compensation: Compensation | None = None
    salary_band: str | None = None  # low | standard | high | premium

    culture_tags: list[str] = []
    motivation: str | None = None
    company_values: str | None = None

    skills: list[str] = []
    required_skills: list[str] = []

    industry: str | None = None
    preferred_industry: str | None = None
    contract_type: str | None = None
    preferred_contract_type: str | None = None
    company_size: str | None = None
    preferred_company_size: str | None = None

    history: list[ApplicationRecord] = []
    description_embedding: list[float] | None = None

    @field_validator("experience_level", mode="before")
    @classmethod
    def _parse_experience(cls, value: Any) -> ExperienceLevel | None:
        return parse_level(ExperienceLevel, value)

    @field_validator("required_language_level", mode="before")
    @classmethod
    def _parse_required_language(cls, value: Any) -> LanguageLevel | None:
        return parse_level(LanguageLevel, value)

    @field_validator("languages", mode="before")
    @classmethod
    def _parse_languages(cls, value: Any) -> dict[str, LanguageLevel]:
        if not value:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("languages must be a mapping of language to level")
        parsed: dict[str, LanguageLevel] = {}
        for language, level in value.items():
            lvl = parse_level(LanguageLevel, level)
            if lvl is not None:
                parsed[str(language).strip().lower()] = lvl
        return parsed

    @field_validator("required_language", mode="before")
    @classmethod
    def _lower_language(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return "english"
        return str(value).strip().lower()

    @field_validator("language_importance", mode="before")
    @classmethod
    def _lower_importance(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in ("high", "medium", "low"):
            return value.strip().lower()
        return None

    @field_validator("country", "preferred_location", mode="before")
    @classmethod
    def _upper_codes(cls, value: Any) -> str | None:
        return _clean_code(value)

    @field_validator("compensation", mode="before")
    @classmethod
    def _bare_amount(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return {"amount": value}
        return value

    @field_validator("culture_tags", "skills", "required_skills", mode="before")
    @classmethod
    def _clean_terms(cls, value: Any) -> list[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("expected a list of terms or a comma-separated string")
        return [str(v).strip() for v in value if str(v).strip()]


class CompanyProfile(BaseModel):
    """A company evaluated as a recruitment lead."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: EntityId
    name: str = ""
    revenue: float | None = Field(None, ge=0)
    open_positions: int | None = Field(None, ge=0)
    offers_relocation: bool = False
    provides_housing: bool = False
    helps_with_visa: bool = False
    transport_support: bool = False
    language_training: bool = False
    email_response_hours: float | None = Field(None, ge=0)
    industry: str | None = None
    size: str | None = None  # small | medium | large

    @field_validator("industry", "size", mode="before")
    @classmethod
    def _lower_terms(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip().lower() or None


class HistoricalRecord(BaseModel):
    """A past overall score paired with its real-world outcome."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    overall_score: float = Field(..., ge=0, le=100)
    actual_success: float = Field(..., ge=0, le=100)
