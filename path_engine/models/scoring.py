"""
Scoring model: sub-scores, weights, and ScoredCandidate.

total = 0.4 * vector_similarity + 0.2 * skills_match
      + 0.2 * values_alignment + 0.2 * feasibility

The weights are a fixed design constant (not part of EngineConfig).
"""

from typing import Dict

from pydantic import BaseModel

from .template import PathTemplate

# Neutral value used when a sub-score has no input data
NEUTRAL_SCORE = 0.5

SCORING_WEIGHTS: Dict[str, float] = {
    "vector_similarity": 0.4,
    "skills_match": 0.2,
    "values_alignment": 0.2,
    "feasibility": 0.2,
}

if abs(sum(SCORING_WEIGHTS.values()) - 1.0) > 1e-9:
    raise ValueError(f"Scoring weights must sum to 1.0, got {sum(SCORING_WEIGHTS.values())}")


def clamp_unit(value: float) -> float:
    """Clamp to [0, 1]."""
    return max(0.0, min(1.0, value))


def weighted_total(
    vector_similarity: float,
    skills_match: float,
    values_alignment: float,
    feasibility: float,
) -> float:
    return (
        SCORING_WEIGHTS["vector_similarity"] * vector_similarity
        + SCORING_WEIGHTS["skills_match"] * skills_match
        + SCORING_WEIGHTS["values_alignment"] * values_alignment
        + SCORING_WEIGHTS["feasibility"] * feasibility
    )


class SubScores(BaseModel):
    """The four [0,1] sub-scores of a candidate and their weighted total."""

    vector_similarity: float
    skills_match: float
    values_alignment: float
    feasibility: float
    total: float


class ScoredCandidate(BaseModel):
    """A template with all its scoring components for one request."""

    template: PathTemplate
    scores: SubScores
    # Position in the similarity-ordered retrieval result (0 = most similar)
    retrieval_rank: int = 0
