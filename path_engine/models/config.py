"""
Engine configuration: retrieval, validation, and explanation parameters.

EngineConfig defaults are defined here. The server may pass a dict (e.g. from
environment-derived settings); from_dict() merges it with these defaults.
Scoring weights live in models.scoring.SCORING_WEIGHTS.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator


class EngineConfig(BaseModel):
    """Configuration for the recommendation pipeline."""

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    # Cosine similarity a template must strictly exceed to be retrieved.
    similarity_threshold: float = Field(default=0.5, ge=-1.0, le=1.0)

    # Max candidates pulled from the store. Larger than top_n so feasibility
    # and values scores can reorder a wider pool.
    retrieval_limit: int = Field(default=20, ge=1)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    default_top_n: int = Field(default=5, ge=0)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    # Minimum dream length (characters, after stripping whitespace).
    min_dream_length: int = Field(default=20, ge=0)

    # -------------------------------------------------------------------------
    # External capabilities
    # -------------------------------------------------------------------------

    # Per-call timeout for the embedding capability. Exceeding it is fatal.
    embedding_timeout_seconds: float = Field(default=15.0, gt=0)

    # Per-candidate timeout for explanation generation. Exceeding it falls
    # back to the deterministic template.
    explanation_timeout_seconds: float = Field(default=20.0, gt=0)

    # Max explanation calls in flight at once.
    explanation_concurrency: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def pool_covers_default_output(self):
        if self.retrieval_limit < self.default_top_n:
            raise ValueError(
                f"retrieval_limit ({self.retrieval_limit}) must be >= default_top_n ({self.default_top_n})"
            )
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "EngineConfig":
        """Create config from a dictionary, accepting nested retrieval/explanation groups."""
        flat = {}
        for group in ("retrieval", "output", "validation", "explanation", "embedding"):
            if isinstance(config_dict.get(group), dict):
                flat.update(config_dict[group])
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed and v is not None}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = EngineConfig()


def resolve_config(config: Optional["EngineConfig"]) -> "EngineConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
