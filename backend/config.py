import json
import re
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode


def _parse_cors_origins(raw: str) -> list[str]:
    """Parse CORS_ORIGINS as comma-separated string or JSON list."""
    raw = raw.strip()
    if raw.startswith("["):
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


class _WeightTable(BaseModel):
    """Fixed (not learned) ensemble weights; every table must sum to 1.0."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @model_validator(mode="after")
    def _check_sum(self):
        total = sum(self.model_dump().values())
        if abs(total - 1.0) > 1e-3:
            raise ValueError(f"{type(self).__name__} must sum to 1.0, got {total:.3f}")
        return self


class MatchWeights(_WeightTable):
    """Candidate-opportunity ensemble."""
    skill: float = Field(0.25, ge=0, le=1)
    experience: float = Field(0.20, ge=0, le=1)
    location: float = Field(0.15, ge=0, le=1)
    cultural_fit: float = Field(0.15, ge=0, le=1, alias="culturalFit")
    language: float = Field(0.15, ge=0, le=1)
    compensation: float = Field(0.10, ge=0, le=1)

    def as_table(self) -> dict[str, float]:
        return {
            "skill_similarity": self.skill,
            "experience_fit": self.experience,
            "location_fit": self.location,
            "cultural_fit": self.cultural_fit,
            "language_fit": self.language,
            "compensation_fit": self.compensation,
        }


class AdvancedWeights(_WeightTable):
    """Advanced ("neural-style") ensemble; risk enters inverted."""
    neural: float = Field(0.25, ge=0, le=1)
    behavioral: float = Field(0.20, ge=0, le=1)
    trajectory: float = Field(0.20, ge=0, le=1)
    inverted_risk: float = Field(0.15, ge=0, le=1, alias="invertedRisk")
    market: float = Field(0.10, ge=0, le=1)
    retention: float = Field(0.10, ge=0, le=1)

    def as_table(self) -> dict[str, float]:
        return {
            "neural_similarity": self.neural,
            "behavioral_pattern": self.behavioral,
            "career_trajectory": self.trajectory,
            "inverted_risk": self.inverted_risk,
            "market_value_alignment": self.market,
            "retention_likelihood": self.retention,
        }


class LeadWeights(_WeightTable):
    """Company/lead qualification ensemble."""
    financial_health: float = Field(0.25, ge=0, le=1, alias="financialHealth")
    hiring_urgency: float = Field(0.20, ge=0, le=1, alias="hiringUrgency")
    relocation_support: float = Field(0.20, ge=0, le=1, alias="relocationSupport")
    communication: float = Field(0.15, ge=0, le=1)
    industry_match: float = Field(0.10, ge=0, le=1, alias="industryMatch")
    size_compatibility: float = Field(0.10, ge=0, le=1, alias="sizeCompatibility")

    def as_table(self) -> dict[str, float]:
        return {
            "financial_health": self.financial_health,
            "hiring_urgency": self.hiring_urgency,
            "relocation_support": self.relocation_support,
            "communication_quality": self.communication,
            "industry_match": self.industry_match,
            "size_compatibility": self.size_compatibility,
        }


class ConfidencePenalties(BaseModel):
    """Points removed from confidence per missing optional input."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    profile_text: int = Field(20, ge=0, le=100, alias="profileText")
    application_history: int = Field(15, ge=0, le=100, alias="applicationHistory")
    opportunity_embedding: int = Field(10, ge=0, le=100, alias="opportunityEmbedding")
    floor: int = Field(60, ge=0, le=100)

    def as_table(self) -> dict[str, int]:
        return {
            "profile_text": self.profile_text,
            "application_history": self.application_history,
            "opportunity_embedding": self.opportunity_embedding,
        }


_WEIGHT_SECTIONS: dict[str, type[BaseModel]] = {
    "weights": MatchWeights,
    "advanced_weights": AdvancedWeights,
    "lead_weights": LeadWeights,
    "confidence_penalties": ConfidencePenalties,
}


def load_weights_file(path: str | Path) -> dict[str, dict[str, Any]]:
    """Read weight-table overrides from a YAML file.

    Top-level keys may be snake_case or camelCase (``leadWeights``); keys
    inside each table likewise (``culturalFit``). Unknown tables are rejected.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Weights file must contain a mapping: {path}")

    overrides: dict[str, dict[str, Any]] = {}
    for section, values in data.items():
        name = _snake_case(str(section))
        if name not in _WEIGHT_SECTIONS:
            raise ValueError(f"Unknown weights section {section!r} in {path}")
        overrides[name] = {_snake_case(str(k)): v for k, v in (values or {}).items()}
    return overrides


class Settings(BaseSettings):
    # Embedding provider: "hashing" (deterministic, local) | "gemini" (remote)
    embedding_provider: str = "hashing"
    gemini_api_key: str = ""
    embedding_model: str = "gemini-embedding-001"
    embedding_dimensions: int = Field(1536, gt=0)
    embedding_timeout_seconds: float = Field(5.0, gt=0)
    embedding_max_chars: int = Field(8000, gt=0)

    # Pair-level concurrency for batch scoring
    max_concurrency: int = Field(8, ge=1)

    weights: MatchWeights = MatchWeights()
    advanced_weights: AdvancedWeights = AdvancedWeights()
    lead_weights: LeadWeights = LeadWeights()
    confidence_penalties: ConfidencePenalties = ConfidencePenalties()
    weights_file: str = ""  # optional YAML overriding the tables above

    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
        "protected_namespaces": ("settings_",),
    }

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _parse_cors_origins(value)
        return value

    @model_validator(mode="after")
    def _apply_weights_file(self):
        if not self.weights_file:
            return self
        for name, values in load_weights_file(self.weights_file).items():
            current = getattr(self, name).model_dump()
            setattr(self, name, _WEIGHT_SECTIONS[name].model_validate({**current, **values}))
        return self


def get_settings(**overrides: Any) -> Settings:
    """Build a fresh Settings from the environment plus explicit overrides."""
    return Settings(**overrides)
