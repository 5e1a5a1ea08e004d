"""Candidate scoring: overlap, feasibility, and the weighted total."""

from .core import score_candidates, score_template
from .feasibility import COST_TIERS, HOURS_TIERS, cost_bonus, feasibility_score, hours_bonus
from .overlap import lenient_match, normalize_terms, overlap_score

__all__ = [
    "COST_TIERS",
    "HOURS_TIERS",
    "cost_bonus",
    "feasibility_score",
    "hours_bonus",
    "lenient_match",
    "normalize_terms",
    "overlap_score",
    "score_candidates",
    "score_template",
]
