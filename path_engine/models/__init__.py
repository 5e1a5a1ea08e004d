"""Data models for the path recommendation engine."""

from .config import DEFAULT_CONFIG, EngineConfig, resolve_config
from .profile import UserProfile, ensure_profile
from .recommendation import Diagnostics, Recommendation, RecommendationResult
from .scoring import (
    NEUTRAL_SCORE,
    SCORING_WEIGHTS,
    ScoredCandidate,
    SubScores,
    clamp_unit,
    weighted_total,
)
from .template import (
    Outcomes,
    PathTemplate,
    PlanTemplate,
    PlanWeek,
    Requirements,
    TypicalFit,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Diagnostics",
    "EngineConfig",
    "NEUTRAL_SCORE",
    "Outcomes",
    "PathTemplate",
    "PlanTemplate",
    "PlanWeek",
    "Recommendation",
    "RecommendationResult",
    "Requirements",
    "SCORING_WEIGHTS",
    "ScoredCandidate",
    "SubScores",
    "TypicalFit",
    "UserProfile",
    "clamp_unit",
    "ensure_profile",
    "resolve_config",
    "weighted_total",
]
