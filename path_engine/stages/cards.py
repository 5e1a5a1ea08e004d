"""
Option cards: shape a ranked candidate and its explanation for display.

Missing template fields get fixed defaults so every card is complete.
"""

import math
from typing import List

from ..models.recommendation import Recommendation
from ..models.scoring import ScoredCandidate

DEFAULT_TIME_TO_FIRST_INCOME_WEEKS = 8
DEFAULT_STARTUP_COST_RANGE_USD = (0, 500)
DEFAULT_KEY_STEPS = ["Define your offer", "Set up basic infrastructure", "Start outreach"]
DEFAULT_RISKS = ["Initial learning curve", "Market validation required"]
DEFAULT_FIRST_WIN = "Quick wins within 6-8 weeks"

RISK_TO_DIFFICULTY = {"low": "Easy", "medium": "Medium", "high": "Hard"}


def fit_score(total: float) -> int:
    """Total in [0,1] → 1..5, rounding half up."""
    return max(1, min(5, int(math.floor(total * 5 + 0.5))))


def _format_weeks(weeks: float):
    return int(weeks) if float(weeks).is_integer() else weeks


def to_recommendation(candidate: ScoredCandidate, why_you: List[str]) -> Recommendation:
    template = candidate.template
    requirements = template.requirements
    outcomes = template.outcomes
    weeks = outcomes.avg_time_to_first_client_weeks if outcomes else None

    first_win = (
        f"First client in {_format_weeks(weeks)} weeks" if weeks else DEFAULT_FIRST_WIN
    )
    difficulty = RISK_TO_DIFFICULTY.get(
        requirements.risk_level if requirements else None, "Medium"
    )
    cost_range = (
        requirements.startup_cost_range_usd
        if requirements and requirements.startup_cost_range_usd
        else DEFAULT_STARTUP_COST_RANGE_USD
    )
    key_steps = (
        template.plan_template.first_week_tasks() if template.plan_template else []
    ) or list(DEFAULT_KEY_STEPS)

    return Recommendation(
        template_id=template.id,
        title=template.title,
        why_you=why_you,
        first_win=first_win,
        difficulty=difficulty,
        time_to_first_income_weeks=weeks or DEFAULT_TIME_TO_FIRST_INCOME_WEEKS,
        startup_cost_range_usd=cost_range,
        key_steps=key_steps,
        risks=list(DEFAULT_RISKS),
        fit_score=fit_score(candidate.scores.total),
        total_score=candidate.scores.total,
    )
