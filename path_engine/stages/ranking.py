"""
Ranking: order scored candidates by total and keep the top N.

Totals are quantized to TIE_EPSILON before sorting; equal quantized totals
fall back to retrieval order (higher similarity first).
"""

from typing import List, Sequence, Tuple

from ..models.scoring import ScoredCandidate

TIE_EPSILON = 1e-9


def _rank_key(candidate: ScoredCandidate) -> Tuple[int, int]:
    return (-round(candidate.scores.total / TIE_EPSILON), candidate.retrieval_rank)


def rank_candidates(candidates: Sequence[ScoredCandidate], top_n: int = 5) -> List[ScoredCandidate]:
    """Return at most top_n candidates, best first."""
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")
    return sorted(candidates, key=_rank_key)[:top_n]
