"""Lead qualifier output for a company."""

from pydantic import BaseModel, ConfigDict


class LeadScore(BaseModel):
    """Overall fit of a company as a recruitment lead, with its sub-scores."""
    model_config = ConfigDict(frozen=True)

    company_id: str
    overall_fit: int = 0  # 0-100
    financial_health: int = 50
    hiring_urgency: int = 50
    relocation_support: int = 50
    communication_quality: int = 70
    industry_match: int = 70
    size_compatibility: int = 75
    reasons: tuple[str, ...] = ()

    def sub_scores(self) -> dict[str, int]:
        return {
            "financial_health": self.financial_health,
            "hiring_urgency": self.hiring_urgency,
            "relocation_support": self.relocation_support,
            "communication_quality": self.communication_quality,
            "industry_match": self.industry_match,
            "size_compatibility": self.size_compatibility,
        }
