"""Embedding strategy: embed-text builders and model constants."""

from .embedding_strategy import (
    EMBEDDING_DIMENSIONS,
    EMBEDDING_MODEL,
    STRATEGY_VERSION,
    get_profile_embed_text,
    get_template_embed_text,
)

__all__ = [
    "get_profile_embed_text",
    "get_template_embed_text",
    "STRATEGY_VERSION",
    "EMBEDDING_MODEL",
    "EMBEDDING_DIMENSIONS",
]
