"""
Ranker Tests

Ordering by total, epsilon ties resolved by retrieval order, truncation.
"""

import itertools

import pytest

from path_engine.models.scoring import ScoredCandidate, SubScores
from path_engine.models.template import PathTemplate
from path_engine.stages.ranking import TIE_EPSILON, rank_candidates
from path_engine.tests.conftest import make_template


def _candidate(template_id: str, total: float, rank: int) -> ScoredCandidate:
    return ScoredCandidate(
        template=PathTemplate.model_validate(make_template(template_id, [1.0, 0.0, 0.0])),
        scores=SubScores(
            vector_similarity=total,
            skills_match=total,
            values_alignment=total,
            feasibility=total,
            total=total,
        ),
        retrieval_rank=rank,
    )


class TestRanking:
    def test_orders_by_total_descending(self):
        ranked = rank_candidates(
            [_candidate("a", 0.5, 0), _candidate("b", 0.9, 1), _candidate("c", 0.7, 2)]
        )
        assert [c.template.id for c in ranked] == ["b", "c", "a"]

    def test_equal_totals_keep_retrieval_order(self):
        ranked = rank_candidates([_candidate("second", 0.6, 1), _candidate("first", 0.6, 0)])
        assert [c.template.id for c in ranked] == ["first", "second"]

    def test_totals_within_epsilon_are_ties(self):
        ranked = rank_candidates(
            [_candidate("a", 0.6, 0), _candidate("b", 0.6 + TIE_EPSILON / 10, 1)]
        )
        assert [c.template.id for c in ranked] == ["a", "b"]

    def test_totals_beyond_epsilon_are_ordered(self):
        ranked = rank_candidates([_candidate("a", 0.6, 0), _candidate("b", 0.6 + 1e-6, 1)])
        assert [c.template.id for c in ranked] == ["b", "a"]

    def test_truncates_to_top_n(self):
        candidates = [_candidate(str(i), i / 10, i) for i in range(8)]
        assert len(rank_candidates(candidates)) == 5
        assert len(rank_candidates(candidates, top_n=2)) == 2

    def test_top_n_zero_returns_empty(self):
        assert rank_candidates([_candidate("a", 0.5, 0)], top_n=0) == []

    def test_negative_top_n_rejected(self):
        with pytest.raises(ValueError):
            rank_candidates([], top_n=-1)

    def test_deterministic(self):
        candidates = [_candidate(str(i), round((i * 7 % 5) / 5, 2), i) for i in range(10)]
        first = [c.template.id for c in rank_candidates(candidates, 10)]
        second = [c.template.id for c in rank_candidates(list(reversed(candidates)), 10)]
        assert first == second

    def test_near_ties_order_is_independent_of_input_order(self):
        # a~b and b~c within epsilon, but a and c are further apart
        candidates = [
            _candidate("a", 0.5, 2),
            _candidate("b", 0.5 + 0.6 * TIE_EPSILON, 1),
            _candidate("c", 0.5 + 1.2 * TIE_EPSILON, 0),
        ]
        orders = {
            tuple(c.template.id for c in rank_candidates(list(p), 3))
            for p in itertools.permutations(candidates)
        }
        assert len(orders) == 1
