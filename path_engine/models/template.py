"""
PathTemplate model: a curated career/business path with matching metadata.

Built from store records via PathTemplate.model_validate(d). Nested JSON blobs
(typical_fit, requirements, outcomes, plan_template) are explicit models so
malformed records fail validation at the store boundary instead of flowing
into scoring. Legacy column names from the seeded catalog are accepted as
aliases (startup_cost, avg_time_to_first_client).
"""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TypicalFit(BaseModel):
    """Matching surface against a profile."""

    model_config = ConfigDict(extra="ignore")

    sparks: List[str] = []
    values: List[str] = []
    skills_needed: List[str] = []
    time_commitment: Optional[str] = None

    @field_validator("sparks", "values", "skills_needed", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v


class Requirements(BaseModel):
    model_config = ConfigDict(extra="ignore")

    min_hours: Optional[float] = None
    startup_cost_range_usd: Optional[Tuple[float, float]] = Field(
        default=None,
        validation_alias=AliasChoices("startup_cost_range_usd", "startup_cost"),
    )
    risk_level: Optional[Literal["low", "medium", "high"]] = None

    @field_validator("risk_level", mode="before")
    @classmethod
    def _lower_risk(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("startup_cost_range_usd")
    @classmethod
    def _non_negative_costs(cls, v):
        if v is not None and (v[0] < 0 or v[1] < 0):
            raise ValueError("startup cost bounds must be non-negative")
        return v

    @property
    def average_startup_cost(self) -> Optional[float]:
        if self.startup_cost_range_usd is None:
            return None
        low, high = self.startup_cost_range_usd
        return (low + high) / 2


class Outcomes(BaseModel):
    model_config = ConfigDict(extra="ignore")

    avg_time_to_first_client_weeks: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "avg_time_to_first_client_weeks", "avg_time_to_first_client"
        ),
    )
    avg_income: Optional[float] = None
    success_rate: Optional[float] = None


class PlanWeek(BaseModel):
    week: int
    tasks: List[str] = []


class PlanTemplate(BaseModel):
    weeks: List[PlanWeek] = []

    def first_week_tasks(self) -> List[str]:
        return list(self.weeks[0].tasks) if self.weeks else []


class PathTemplate(BaseModel):
    """
    Path template record. Immutable for the duration of a request.

    embedding may be empty when the backing store keeps vectors separately
    (e.g. Qdrant returns payloads without vectors).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    title: str
    category: Literal["business", "career"]
    subcategory: Optional[str] = None
    description: Optional[str] = None
    typical_fit: TypicalFit = Field(default_factory=TypicalFit)
    requirements: Optional[Requirements] = None
    outcomes: Optional[Outcomes] = None
    plan_template: Optional[PlanTemplate] = None
    embedding: List[float] = []
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("id is required")
        return str(v)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v):
        if not v.strip():
            raise ValueError("title cannot be blank")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _lower_category(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("typical_fit", mode="before")
    @classmethod
    def _none_fit(cls, v):
        return {} if v is None else v

    def to_payload(self) -> Dict[str, Any]:
        """Metadata without the vector (for vector-store payloads)."""
        return self.model_dump(mode="json", exclude={"embedding"})
