"""Shared utilities for similarity."""

from .similarity import cosine_similarities, cosine_similarity

__all__ = [
    "cosine_similarity",
    "cosine_similarities",
]
