"""
Error taxonomy for the path recommendation engine.

Only InvalidProfile and EmbeddingUnavailable cross the public boundary of
RecommendationOrchestrator.recommend(). ExplanationFailure and
TemplateValidationError are raised and recovered internally.
"""

from typing import Optional


class RecommendationError(Exception):
    """Base class for engine errors."""


class InvalidProfile(RecommendationError, ValueError):
    """Profile is missing data the engine needs (caller error, not retried)."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class EmbeddingUnavailable(RecommendationError):
    """The embedding capability failed, timed out, or returned an unusable vector."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ExplanationFailure(RecommendationError):
    """Text generation failed or returned something other than 3 strings."""


class TemplateValidationError(RecommendationError, ValueError):
    """A template record is malformed and must be quarantined."""

    def __init__(self, record_id: str, reason: str):
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"template {record_id!r}: {reason}")
