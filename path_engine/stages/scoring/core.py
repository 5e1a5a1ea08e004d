"""
Per-candidate scoring: four sub-scores and their weighted total.

Pure and deterministic. Builds a ScoredCandidate for each retrieved template
given its vector similarity and the profile.
"""

import math
from typing import List, Sequence, Tuple

from ...models.profile import UserProfile
from ...models.scoring import ScoredCandidate, SubScores, clamp_unit, weighted_total
from ...models.template import PathTemplate
from .feasibility import feasibility_score
from .overlap import overlap_score


def score_template(
    profile: UserProfile,
    template: PathTemplate,
    vector_similarity: float,
) -> SubScores:
    """
    skills_match compares the profile's sparks with the template's typical-fit
    sparks; values_alignment compares values with values.
    """
    sim = clamp_unit(vector_similarity) if math.isfinite(vector_similarity) else 0.0
    skills = overlap_score(profile.sparks, template.typical_fit.sparks)
    values = overlap_score(profile.values, template.typical_fit.values)
    feas = feasibility_score(template)
    return SubScores(
        vector_similarity=sim,
        skills_match=skills,
        values_alignment=values,
        feasibility=feas,
        total=weighted_total(sim, skills, values, feas),
    )


def score_candidates(
    profile: UserProfile,
    hits: Sequence[Tuple[PathTemplate, float]],
) -> List[ScoredCandidate]:
    """Score hits in retrieval order; retrieval_rank records that order for tie-breaks."""
    return [
        ScoredCandidate(
            template=template,
            scores=score_template(profile, template, similarity),
            retrieval_rank=rank,
        )
        for rank, (template, similarity) in enumerate(hits)
    ]
