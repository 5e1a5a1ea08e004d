"""
Collaborator protocols.

The orchestrator receives one of each at construction time. Implementations:
OpenAI embeddings / litellm text generation / JSON or Qdrant template stores
(junie_server.services), and in-process fakes in tests.
"""

from typing import List, Protocol, Sequence, Tuple

from .models.template import PathTemplate


class EmbeddingCapability(Protocol):
    """Turns text into a dense vector of the store's dimensionality."""

    async def embed(self, text: str) -> List[float]:
        """Return the embedding for text. May raise or time out."""
        ...


class TemplateStore(Protocol):
    """Read-only path template collection with cosine similarity search."""

    async def count_active(self) -> int:
        """Number of templates with is_active = true."""
        ...

    async def retrieve_candidates(
        self,
        query_vector: Sequence[float],
        threshold: float,
        limit: int,
    ) -> List[Tuple[PathTemplate, float]]:
        """
        Active templates with cosine similarity strictly above threshold,
        ordered by descending similarity, at most limit entries.
        """
        ...


class TextGenerationCapability(Protocol):
    """Generates short text bullets from a structured prompt."""

    async def generate(self, prompt: str) -> List[str]:
        """Return the generated strings. May raise, time out, or return junk."""
        ...
