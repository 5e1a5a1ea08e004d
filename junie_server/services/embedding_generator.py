"""
Embedding Generator

Generates embeddings with OpenAI's API. Implements the engine's
EmbeddingCapability (async embed) and a batch call used when seeding the
template catalog.

Usage:
    generator = EmbeddingGenerator(api_key="sk-...")
    vector = await generator.embed("Interests and passions: ...")
    vectors = await generator.generate_batch(texts)
"""

import logging
import os
from typing import List, Optional, Tuple

from openai import AsyncOpenAI

from path_engine.embedding import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """Async OpenAI embeddings, one attempt per call."""

    BATCH_SIZE = 100
    COST_PER_MILLION_TOKENS = 0.02  # USD for text-embedding-3-small

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = EMBEDDING_MODEL,
        dimensions: int = EMBEDDING_DIMENSIONS,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            model: Embedding model to use
            dimensions: Embedding dimensions
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self.dimensions = dimensions
        self.timeout = timeout
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if not self.api_key:
            raise ValueError(
                "OpenAI API key not provided. Set OPENAI_API_KEY environment variable "
                "or pass api_key to EmbeddingGenerator."
            )
        if self._client is None:
            # Retries are the caller's concern
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def estimate_cost(self, texts: List[str]) -> float:
        """Rough USD estimate: 1 token ≈ 4 characters."""
        estimated_tokens = sum(len(t) for t in texts) / 4
        return (estimated_tokens / 1_000_000) * self.COST_PER_MILLION_TOKENS

    async def generate_batch(self, texts: List[str]) -> List[List[float]]:
        """Embed texts in batches of BATCH_SIZE, preserving order."""
        vectors: List[List[float]] = []
        for i in range(0, len(texts), self.BATCH_SIZE):
            batch = texts[i : i + self.BATCH_SIZE]
            response = await self.client.embeddings.create(
                model=self.model,
                input=batch,
                dimensions=self.dimensions,
            )
            vectors.extend(item.embedding for item in response.data)
            logger.debug("[embeddings] batch %s: %s texts", i // self.BATCH_SIZE + 1, len(batch))
        return vectors

    async def embed(self, text: str) -> List[float]:
        vectors = await self.generate_batch([text])
        return vectors[0]


def check_openai_available(api_key: Optional[str] = None) -> Tuple[bool, str]:
    """
    Check whether an OpenAI key is configured (no network call).

    Returns:
        (is_available, message)
    """
    key = api_key or os.environ.get("OPENAI_API_KEY")
    if not key:
        return False, "OPENAI_API_KEY not set"
    return True, "API key configured"
