"""
Feasibility score from startup cost and weekly hours.

Starts at NEUTRAL_SCORE and adds the first matching tier bonus for each of
average startup cost and minimum weekly hours. Capped at 1.
"""

from typing import Optional

from ...models.scoring import NEUTRAL_SCORE
from ...models.template import PathTemplate

# (exclusive upper bound on average startup cost in USD, bonus)
COST_TIERS = ((100, 0.3), (500, 0.2), (1000, 0.1))

# (inclusive upper bound on minimum hours per week, bonus)
HOURS_TIERS = ((10, 0.2), (20, 0.1))


def cost_bonus(average_cost: Optional[float]) -> float:
    if average_cost is None:
        return 0.0
    for bound, bonus in COST_TIERS:
        if average_cost < bound:
            return bonus
    return 0.0


def hours_bonus(min_hours: Optional[float]) -> float:
    if min_hours is None:
        return 0.0
    for bound, bonus in HOURS_TIERS:
        if min_hours <= bound:
            return bonus
    return 0.0


def feasibility_score(template: PathTemplate) -> float:
    requirements = template.requirements
    if requirements is None:
        return NEUTRAL_SCORE
    score = (
        NEUTRAL_SCORE
        + cost_bonus(requirements.average_startup_cost)
        + hours_bonus(requirements.min_hours)
    )
    return min(score, 1.0)
