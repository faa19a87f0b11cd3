"""Matching engine: wires embeddings, factor scorers, ensembles and verdicts.

Flow (basic):
    candidate + opportunity
      ├─ embed descriptions (async, concurrent, timeout per call)
      ├─ factor scorers (sync, pure)            → factors
      ├─ Ensemble.combine(factors, missing)     → overall, confidence
      └─ skills gap + verdict templates         → MatchResult

The advanced path swaps the factor set for the facet-similarity /
behavioral / trajectory / risk / market / retention factors and combines
them with the advanced weight table (risk inverted).

Only the embedding calls are async. A failed or timed-out embedding never
fails the request: the similarity factors fall back to neutral and the
result is flagged ``degraded``.
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from config import Settings, get_settings
from models.schemas.lead_score import LeadScore
from models.schemas.match_result import MatchResult
from models.schemas.profiles import CompanyProfile, EntityProfile, HistoricalRecord
from services import calibration, factors
from services.embeddings.base import EmbeddingProvider, EmbeddingUnavailableError
from services.embeddings.provider_registry import create_provider
from services.ensemble import Ensemble
from services.lead_qualifier import score_lead
from services.profile_store import InMemoryProfileStore, ProfileStore
from services.similarity import cosine_score
from services.verdict import build_summary, recommended_actions, red_flags

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Optional inputs that lower confidence when absent
PROFILE_TEXT = "profile_text"
APPLICATION_HISTORY = "application_history"
OPPORTUNITY_EMBEDDING = "opportunity_embedding"


def _coerce(model_cls: type[ModelT], value: Any) -> ModelT:
    """Accept a model instance or a plain mapping; validation errors propagate."""
    if isinstance(value, model_cls):
        return value
    return model_cls.model_validate(value)


def _coerce_pair(pair: Any) -> tuple[EntityProfile, EntityProfile]:
    if isinstance(pair, BaseModel):
        pair = {"candidate": pair.candidate, "opportunity": pair.opportunity}
    if isinstance(pair, dict):
        return _coerce(EntityProfile, pair["candidate"]), _coerce(EntityProfile, pair["opportunity"])
    candidate, opportunity = pair
    return _coerce(EntityProfile, candidate), _coerce(EntityProfile, opportunity)


def _drain(task: asyncio.Future) -> None:
    # Retrieve the outcome of a shielded call whose awaiter was cancelled
    if not task.cancelled():
        task.exception()


class MatchingEngine:
    """Scores candidate/opportunity pairs and company leads.

    Construct one per application or test run; nothing is shared through
    module globals. ``provider`` and ``store`` default to the configured
    embedding provider and an empty in-memory store.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        provider: EmbeddingProvider | None = None,
        store: ProfileStore | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.provider = provider or create_provider(self.settings)
        self.store = store or InMemoryProfileStore()

        penalties = self.settings.confidence_penalties
        self.basic_ensemble = Ensemble(
            self.settings.weights.as_table(), penalties.as_table(), penalties.floor
        )
        self.advanced_ensemble = Ensemble(
            self.settings.advanced_weights.as_table(), penalties.as_table(), penalties.floor
        )
        logger.info(
            "Matching engine created (provider=%s, dims=%d, max_concurrency=%d)",
            self.provider.provider_name, self.provider.dimensions, self.settings.max_concurrency,
        )

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    async def _embed(self, text: str) -> tuple[list[float] | None, bool]:
        """Return (vector, failed). Blank text is not embedded and is not a failure."""
        if not text or not text.strip():
            return None, False

        task = asyncio.ensure_future(
            asyncio.wait_for(self.provider.embed(text), self.settings.embedding_timeout_seconds)
        )
        task.add_done_callback(_drain)
        try:
            return await asyncio.shield(task), False
        except asyncio.TimeoutError:
            logger.warning(
                "Embedding timed out after %.1fs (provider=%s)",
                self.settings.embedding_timeout_seconds, self.provider.provider_name,
            )
        except EmbeddingUnavailableError as e:
            logger.warning("Embedding unavailable (provider=%s): %s", self.provider.provider_name, e)
        except Exception as e:
            # CancelledError is not an Exception and still propagates
            logger.warning(
                "Embedding failed (provider=%s): %s: %s",
                self.provider.provider_name, type(e).__name__, e,
            )
        return None, True

    async def _profile_vector(self, profile: EntityProfile) -> tuple[list[float] | None, bool]:
        if profile.description_embedding:
            return list(profile.description_embedding), False
        return await self._embed(profile.description)

    async def _facet_scores(
        self, candidate: EntityProfile, opportunity: EntityProfile
    ) -> tuple[dict[str, int], list[float] | None, list[float] | None, bool]:
        """Cosine score per facet, both skills vectors and a failure flag."""
        texts = factors.neural_facet_texts(candidate, opportunity)
        names = list(texts)
        calls = []
        for name in names:
            for profile, text in zip((candidate, opportunity), texts[name]):
                # Precomputed description vectors stand in for the skills facet
                if name == "skills" and profile.description_embedding:
                    calls.append(self._profile_vector(profile))
                else:
                    calls.append(self._embed(text))
        results = await asyncio.gather(*calls)

        scores: dict[str, int] = {}
        failed = False
        for i, name in enumerate(names):
            (cand_vec, cand_failed), (opp_vec, opp_failed) = results[2 * i], results[2 * i + 1]
            scores[name] = cosine_score(cand_vec, opp_vec)
            failed = failed or cand_failed or opp_failed
        skills = 2 * names.index("skills")
        return scores, results[skills][0], results[skills + 1][0], failed

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    @staticmethod
    def _missing_inputs(
        candidate: EntityProfile,
        candidate_vec: list[float] | None,
        opportunity_vec: list[float] | None,
    ) -> list[str]:
        missing = []
        # Profile text that could not be embedded counts as missing
        if not candidate.description.strip() or candidate_vec is None:
            missing.append(PROFILE_TEXT)
        if not candidate.history:
            missing.append(APPLICATION_HISTORY)
        if opportunity_vec is None:
            missing.append(OPPORTUNITY_EMBEDDING)
        return missing

    async def score_match(self, candidate: Any, opportunity: Any) -> MatchResult:
        """Basic weighted-ensemble match."""
        candidate = _coerce(EntityProfile, candidate)
        opportunity = _coerce(EntityProfile, opportunity)

        (cand_vec, cand_failed), (opp_vec, opp_failed) = await asyncio.gather(
            self._profile_vector(candidate), self._profile_vector(opportunity)
        )
        scores = {
            "skill_similarity": cosine_score(cand_vec, opp_vec),
            "experience_fit": factors.experience_fit(candidate, opportunity),
            "location_fit": factors.location_fit(candidate, opportunity),
            "cultural_fit": factors.cultural_fit(candidate, opportunity),
            "language_fit": factors.language_fit(candidate, opportunity),
            "compensation_fit": factors.compensation_fit(candidate, opportunity),
        }
        combined = self.basic_ensemble.combine(scores, self._missing_inputs(candidate, cand_vec, opp_vec))
        return self._build_result(
            candidate,
            opportunity,
            scores,
            combined.overall,
            combined.confidence,
            success_prediction=calibration.predict_placement_success(scores),
            scoring_method="weighted_ensemble",
            degraded=cand_failed or opp_failed,
        )

    async def score_advanced_match(self, candidate: Any, opportunity: Any) -> MatchResult:
        """Advanced ensemble over facet similarity, behavior and career signals."""
        candidate = _coerce(EntityProfile, candidate)
        opportunity = _coerce(EntityProfile, opportunity)

        facet_scores, cand_vec, opp_vec, failed = await self._facet_scores(candidate, opportunity)
        risk = factors.risk_assessment(candidate, opportunity)
        scores = {
            "neural_similarity": factors.neural_similarity(
                facet_scores, factors.historical_performance(candidate)
            ),
            "behavioral_pattern": factors.behavioral_pattern(candidate, opportunity),
            "career_trajectory": factors.career_trajectory(candidate, opportunity),
            "risk_assessment": risk,
            "market_value_alignment": factors.market_value_alignment(candidate, opportunity),
            "retention_likelihood": factors.retention_likelihood(candidate, opportunity),
        }
        combined = self.advanced_ensemble.combine(
            {**scores, "inverted_risk": 100 - risk},
            self._missing_inputs(candidate, cand_vec, opp_vec),
        )
        return self._build_result(
            candidate,
            opportunity,
            scores,
            combined.overall,
            combined.confidence,
            success_prediction=None,
            scoring_method="advanced_ensemble",
            degraded=failed,
        )

    def _build_result(
        self,
        candidate: EntityProfile,
        opportunity: EntityProfile,
        scores: dict[str, int],
        overall: int,
        confidence: int,
        success_prediction: int | None,
        scoring_method: str,
        degraded: bool,
    ) -> MatchResult:
        gap = factors.skills_gap(candidate, opportunity)
        logger.debug(
            "Scored %s -> %s: overall=%d confidence=%d method=%s degraded=%s",
            candidate.id, opportunity.id, overall, confidence, scoring_method, degraded,
        )
        return MatchResult(
            candidate_id=candidate.id,
            opportunity_id=opportunity.id,
            overall_score=overall,
            confidence=confidence,
            factors=scores,
            success_prediction=success_prediction,
            summary=build_summary(overall, confidence, gap, degraded),
            recommendations=recommended_actions(overall, gap),
            red_flags=red_flags(candidate, opportunity),
            skills_gaps=gap.gaps,
            growth_opportunities=gap.opportunities,
            scoring_method=scoring_method,
            degraded=degraded,
        )

    async def score_batch(self, pairs: Iterable[Any], advanced: bool = False) -> list[MatchResult]:
        """Score many pairs concurrently; results keep the input order.

        Every pair is validated before any scoring starts.
        """
        validated = [_coerce_pair(pair) for pair in pairs]
        if not validated:
            return []

        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        score = self.score_advanced_match if advanced else self.score_match

        async def _run(candidate: EntityProfile, opportunity: EntityProfile) -> MatchResult:
            async with semaphore:
                return await score(candidate, opportunity)

        logger.info("Scoring batch of %d pairs (advanced=%s)", len(validated), advanced)
        return list(await asyncio.gather(*(_run(c, o) for c, o in validated)))

    async def score_match_by_id(
        self, candidate_id: str, opportunity_id: str, advanced: bool = False
    ) -> MatchResult:
        candidate = self.store.get_candidate(candidate_id)
        opportunity = self.store.get_opportunity(opportunity_id)
        if advanced:
            return await self.score_advanced_match(candidate, opportunity)
        return await self.score_match(candidate, opportunity)

    # ------------------------------------------------------------------
    # Leads
    # ------------------------------------------------------------------

    def score_lead(self, company: Any) -> LeadScore:
        return score_lead(_coerce(CompanyProfile, company), self.settings.lead_weights)

    def score_lead_by_id(self, company_id: str) -> LeadScore:
        return self.score_lead(self.store.get_company(company_id))

    def qualify_leads(self, companies: Iterable[Any], min_score: int = 70) -> list[LeadScore]:
        """Leads with ``overall_fit >= min_score``, best first."""
        scored = [self.score_lead(company) for company in companies]
        qualified = [lead for lead in scored if lead.overall_fit >= min_score]
        qualified.sort(key=lambda lead: lead.overall_fit, reverse=True)
        return qualified

    # ------------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------------

    def calibrate(self, raw: float, history: Sequence[Any] = ()) -> float:
        return calibration.calibrate(raw, [_coerce(HistoricalRecord, r) for r in history])

    def predict_success_rate(self, match: Any, history: Sequence[Any] | None = None) -> int:
        records = [_coerce(HistoricalRecord, r) for r in history] if history else None
        return calibration.predict_success_rate(_coerce(MatchResult, match), records)
