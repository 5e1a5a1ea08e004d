"""
Profile Embedder: profile text → single dense vector.

Single attempt per call: any error, timeout, or unusable vector becomes
EmbeddingUnavailable. Retries are the caller's concern.
"""

import asyncio
import logging
import math
from typing import List, Optional

from ..embedding.embedding_strategy import get_profile_embed_text
from ..errors import EmbeddingUnavailable
from ..models.profile import UserProfile
from ..protocols import EmbeddingCapability

logger = logging.getLogger(__name__)


def _checked_vector(vector) -> List[float]:
    """Reject empty or non-finite vectors; a garbage vector would corrupt every similarity."""
    if vector is None:
        raise EmbeddingUnavailable("Embedding capability returned no vector")
    try:
        values = [float(x) for x in vector]
    except (TypeError, ValueError) as e:
        raise EmbeddingUnavailable(f"Embedding vector is not numeric: {e}", cause=e) from e
    if not values:
        raise EmbeddingUnavailable("Embedding capability returned an empty vector")
    if not all(math.isfinite(x) for x in values):
        raise EmbeddingUnavailable("Embedding vector contains non-finite values")
    if not any(values):
        raise EmbeddingUnavailable("Embedding capability returned a zero vector")
    return values


class ProfileEmbedder:
    """Wraps an EmbeddingCapability with the profile text strategy and a timeout."""

    def __init__(self, capability: EmbeddingCapability, timeout_seconds: float = 15.0):
        self._capability = capability
        self.timeout_seconds = timeout_seconds

    async def embed(self, profile: UserProfile, timeout_seconds: Optional[float] = None) -> List[float]:
        """timeout_seconds (e.g. what is left of a request deadline) can only shorten the call timeout."""
        timeout = self.timeout_seconds
        if timeout_seconds is not None:
            timeout = max(0.0, min(timeout, timeout_seconds))
        text = get_profile_embed_text(profile)
        logger.debug("[embedding] profile text chars=%s", len(text))
        try:
            vector = await asyncio.wait_for(self._capability.embed(text), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise EmbeddingUnavailable(f"Embedding timed out after {timeout}s", cause=e) from e
        except EmbeddingUnavailable:
            raise
        except Exception as e:
            raise EmbeddingUnavailable(f"Embedding failed: {e}", cause=e) from e
        return _checked_vector(vector)
