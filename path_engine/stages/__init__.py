"""Pipeline stages: validation, embedding, retrieval, scoring, ranking, explanation."""

from .cards import fit_score, to_recommendation
from .embedding import ProfileEmbedder
from .explanation import (
    ExplanationGenerator,
    build_explanation_prompt,
    fallback_explanation,
    parse_explanation,
)
from .orchestrator import PipelineStage, RecommendationOrchestrator
from .ranking import TIE_EPSILON, rank_candidates
from .retrieval import RetrievalOutcome, retrieve_candidates
from .scoring import feasibility_score, overlap_score, score_candidates, score_template
from .validation import validate_profile

__all__ = [
    "ExplanationGenerator",
    "PipelineStage",
    "ProfileEmbedder",
    "RecommendationOrchestrator",
    "RetrievalOutcome",
    "TIE_EPSILON",
    "build_explanation_prompt",
    "fallback_explanation",
    "feasibility_score",
    "fit_score",
    "overlap_score",
    "parse_explanation",
    "rank_candidates",
    "retrieve_candidates",
    "score_candidates",
    "score_template",
    "to_recommendation",
    "validate_profile",
]
