"""
Recommendation output models: the option cards returned to the caller.
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

Difficulty = Literal["Easy", "Medium", "Hard"]
Source = Literal["database", "mock"]


class Recommendation(BaseModel):
    """One ranked option card."""

    template_id: str
    title: str
    why_you: List[str]
    first_win: str
    difficulty: Difficulty = "Medium"
    time_to_first_income_weeks: float = 8
    startup_cost_range_usd: Tuple[float, float] = (0, 500)
    key_steps: List[str] = []
    risks: List[str] = []
    fit_score: int = Field(ge=1, le=5)
    # Weighted total behind fit_score; None for mock catalog entries
    total_score: Optional[float] = None

    @field_validator("why_you")
    @classmethod
    def _exactly_three(cls, v):
        if len(v) != 3:
            raise ValueError(f"why_you must have exactly 3 entries, got {len(v)}")
        return v


class Diagnostics(BaseModel):
    candidates_retrieved: int = 0
    elapsed_ms: int = 0


class RecommendationResult(BaseModel):
    """Result of RecommendationOrchestrator.recommend()."""

    recommendations: List[Recommendation]
    source: Source
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
