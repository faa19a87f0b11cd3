"""Engine output for a candidate/opportunity pair."""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class MatchResult(BaseModel):
    """Immutable outcome of one scoring request.

    ``factors`` holds every named 0-100 sub-score that fed the ensemble
    (``risk_assessment`` is stored un-inverted: higher means riskier).
    ``degraded`` is set when a free-text embedding could not be obtained and
    the similarity factors fell back to their neutral value.
    """
    model_config = ConfigDict(frozen=True)

    candidate_id: str
    opportunity_id: str
    overall_score: int = 0  # 0-100
    confidence: int = 100  # 60-100
    factors: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    success_prediction: int | None = None
    summary: str = ""
    recommendations: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()
    skills_gaps: tuple[str, ...] = ()
    growth_opportunities: tuple[str, ...] = ()
    scoring_method: str = "weighted_ensemble"  # weighted_ensemble | advanced_ensemble
    degraded: bool = False

    @field_validator("factors", mode="after")
    @classmethod
    def _freeze_factors(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    @field_serializer("factors")
    def _dump_factors(self, value: Mapping[str, int]) -> dict[str, int]:
        return dict(value)
