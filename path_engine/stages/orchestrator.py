"""
Pipeline orchestrator: profile in, ranked option cards out.

    Validating → Embedding → Retrieving → (empty) MockFallback → Done
                                        → Scoring → Ranking → Explaining → Done

Failed is reachable only from Validating (InvalidProfile) and Embedding
(EmbeddingUnavailable). Everything after embedding degrades instead of failing:
an empty or erroring store falls back to the mock catalog, and explanation
failures fall back per candidate.

Collaborators are injected at construction; the orchestrator holds no
per-request state, so one instance can serve concurrent requests.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from ..errors import RecommendationError
from ..mock_catalog import build_mock_recommendations
from ..models.config import EngineConfig, resolve_config
from ..models.profile import UserProfile
from ..models.recommendation import Diagnostics, RecommendationResult
from ..protocols import EmbeddingCapability, TemplateStore, TextGenerationCapability
from .cards import to_recommendation
from .embedding import ProfileEmbedder
from .explanation import ExplanationGenerator
from .ranking import rank_candidates
from .retrieval import RetrievalOutcome, retrieve_candidates
from .scoring import score_candidates
from .validation import validate_profile

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    VALIDATING = "validating"
    EMBEDDING = "embedding"
    RETRIEVING = "retrieving"
    MOCK_FALLBACK = "mock_fallback"
    SCORING = "scoring"
    RANKING = "ranking"
    EXPLAINING = "explaining"
    DONE = "done"
    FAILED = "failed"


class RecommendationOrchestrator:
    """
    Usage:
        orchestrator = RecommendationOrchestrator(embedder, store, generator)
        result = await orchestrator.recommend(profile, top_n=5)
    """

    def __init__(
        self,
        embedder: EmbeddingCapability,
        template_store: TemplateStore,
        text_generator: Optional[TextGenerationCapability] = None,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = resolve_config(config)
        self.template_store = template_store
        self._profile_embedder = ProfileEmbedder(
            embedder, timeout_seconds=self.config.embedding_timeout_seconds
        )
        self._explainer = ExplanationGenerator(
            text_generator,
            timeout_seconds=self.config.explanation_timeout_seconds,
            concurrency=self.config.explanation_concurrency,
            clock=clock,
        )
        self._clock = clock

    def _elapsed_ms(self, started: float) -> int:
        return int((self._clock() - started) * 1000)

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        return None if deadline is None else max(0.0, deadline - self._clock())

    async def _retrieve(self, vector, timeout_seconds: Optional[float] = None) -> RetrievalOutcome:
        try:
            return await asyncio.wait_for(
                retrieve_candidates(self.template_store, vector, self.config),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("[retrieval] template store timed out, using mock catalog")
            return RetrievalOutcome(active_count=0, empty_reason="store_timeout")
        except Exception:
            logger.exception("[retrieval] template store failed, using mock catalog")
            return RetrievalOutcome(active_count=0, empty_reason="store_error")

    async def recommend(
        self,
        profile: Union[Dict[str, Any], UserProfile],
        top_n: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> RecommendationResult:
        """
        Run the full pipeline for one profile.

        timeout_seconds is a deadline for the whole request. Embedding past it
        raises EmbeddingUnavailable; retrieval past it falls back to the mock
        catalog; explanations past it get the fallback bullets. Ranked work is
        never discarded.

        Raises:
            InvalidProfile: sparks or values empty, or dream too short.
            EmbeddingUnavailable: the embedding call failed or timed out.
            ValueError: top_n is negative.
        """
        top_n = self.config.default_top_n if top_n is None else top_n
        if top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {top_n}")
        started = self._clock()
        deadline = None if timeout_seconds is None else started + timeout_seconds

        stage = PipelineStage.VALIDATING
        try:
            profile = validate_profile(profile, self.config)
            stage = PipelineStage.EMBEDDING
            logger.info("[pipeline] stage=%s sparks=%s values=%s", stage.value, len(profile.sparks), len(profile.values))
            vector = await self._profile_embedder.embed(profile, self._remaining(deadline))
        except RecommendationError as e:
            logger.warning("[pipeline] stage=%s failed_from=%s error=%s", PipelineStage.FAILED.value, stage.value, e)
            raise

        logger.info("[pipeline] stage=%s dimensions=%s", PipelineStage.RETRIEVING.value, len(vector))
        outcome = await self._retrieve(vector, self._remaining(deadline))

        if outcome.is_empty:
            logger.info(
                "[pipeline] stage=%s reason=%s active_templates=%s",
                PipelineStage.MOCK_FALLBACK.value,
                outcome.empty_reason,
                outcome.active_count,
            )
            recommendations = build_mock_recommendations(profile, top_n)
            logger.info("[pipeline] stage=%s source=mock count=%s", PipelineStage.DONE.value, len(recommendations))
            return RecommendationResult(
                recommendations=recommendations,
                source="mock",
                diagnostics=Diagnostics(candidates_retrieved=0, elapsed_ms=self._elapsed_ms(started)),
            )

        logger.info("[pipeline] stage=%s candidates=%s", PipelineStage.SCORING.value, len(outcome.hits))
        scored = score_candidates(profile, outcome.hits)

        logger.info("[pipeline] stage=%s top_n=%s", PipelineStage.RANKING.value, top_n)
        ranked = rank_candidates(scored, top_n)

        logger.info("[pipeline] stage=%s count=%s", PipelineStage.EXPLAINING.value, len(ranked))
        explanations = await self._explainer.explain_all(ranked, profile, deadline)

        recommendations = [
            to_recommendation(candidate, why_you)
            for candidate, why_you in zip(ranked, explanations)
        ]
        logger.info(
            "[pipeline] stage=%s source=database count=%s top=%s",
            PipelineStage.DONE.value,
            len(recommendations),
            recommendations[0].template_id if recommendations else None,
        )
        return RecommendationResult(
            recommendations=recommendations,
            source="database",
            diagnostics=Diagnostics(
                candidates_retrieved=len(outcome.hits),
                elapsed_ms=self._elapsed_ms(started),
            ),
        )
