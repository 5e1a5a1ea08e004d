"""
Path recommendation engine.

Takes a user profile (sparks, values, dream), retrieves similar path
templates by embedding similarity, scores and ranks them, and explains each
pick in three short bullets. External capabilities (embeddings, text
generation, template storage) are passed in; see protocols.py.
"""

from .errors import (
    EmbeddingUnavailable,
    ExplanationFailure,
    InvalidProfile,
    RecommendationError,
    TemplateValidationError,
)
from .mock_catalog import build_mock_recommendations, load_mock_catalog
from .models import (
    DEFAULT_CONFIG,
    EngineConfig,
    PathTemplate,
    Recommendation,
    RecommendationResult,
    ScoredCandidate,
    SubScores,
    UserProfile,
)
from .protocols import EmbeddingCapability, TemplateStore, TextGenerationCapability
from .stages import PipelineStage, RecommendationOrchestrator
from .stores import InMemoryTemplateStore, ensure_templates, validate_template

__all__ = [
    "DEFAULT_CONFIG",
    "EmbeddingCapability",
    "EmbeddingUnavailable",
    "EngineConfig",
    "ExplanationFailure",
    "InMemoryTemplateStore",
    "InvalidProfile",
    "PathTemplate",
    "PipelineStage",
    "Recommendation",
    "RecommendationError",
    "RecommendationOrchestrator",
    "RecommendationResult",
    "ScoredCandidate",
    "SubScores",
    "TemplateStore",
    "TemplateValidationError",
    "TextGenerationCapability",
    "UserProfile",
    "build_mock_recommendations",
    "ensure_templates",
    "validate_template",
    "load_mock_catalog",
]
