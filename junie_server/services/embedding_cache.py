"""
Embedding Cache

JSON file cache of text embeddings, one file per model + dimensions:

    {cache_dir}/{model}_{dimensions}.json
    {"embedding_model": ..., "embedding_dimensions": ..., "embeddings": {sha256(text): vector}}

Keys are SHA-256 digests so profile text never lands on disk. Correctness
never depends on the cache: a miss just calls the wrapped embedder.
"""

import hashlib
import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from path_engine.protocols import EmbeddingCapability

logger = logging.getLogger(__name__)


def text_key(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class EmbeddingCache:
    """
    Usage:
        cache = EmbeddingCache(cache_dir, "text-embedding-3-small", 1536)
        vector = cache.get(text)
        if vector is None:
            vector = ...
            cache.put(text, vector)
    """

    def __init__(self, cache_dir: Path, embedding_model: str, embedding_dimensions: int):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.embedding_model = embedding_model
        self.embedding_dimensions = embedding_dimensions
        self._lock = threading.Lock()
        self._embeddings: Optional[Dict[str, List[float]]] = None

    @property
    def path(self) -> Path:
        model = self.embedding_model.replace("/", "_").replace("\\", "_")
        return self.cache_dir / f"{model}_{self.embedding_dimensions}.json"

    def _load(self) -> Dict[str, List[float]]:
        if self._embeddings is not None:
            return self._embeddings
        self._embeddings = {}
        if self.path.exists():
            try:
                with open(self.path) as f:
                    data = json.load(f)
                if (
                    data.get("embedding_model") == self.embedding_model
                    and data.get("embedding_dimensions") == self.embedding_dimensions
                ):
                    self._embeddings = data.get("embeddings", {})
                else:
                    logger.warning("[embedding_cache] %s was written for another model, ignoring", self.path)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("[embedding_cache] failed to load %s: %s", self.path, e)
        return self._embeddings

    def _save(self) -> None:
        data = {
            "embedding_model": self.embedding_model,
            "embedding_dimensions": self.embedding_dimensions,
            "updated_at": datetime.now().isoformat(),
            "embeddings": self._embeddings,
        }
        with open(self.path, "w") as f:
            json.dump(data, f)

    def __len__(self) -> int:
        with self._lock:
            return len(self._load())

    def get(self, text: str) -> Optional[List[float]]:
        with self._lock:
            return self._load().get(text_key(text))

    def put(self, text: str, vector: List[float]) -> None:
        if len(vector) != self.embedding_dimensions:
            raise ValueError(
                f"Vector has {len(vector)} dimensions, cache expects {self.embedding_dimensions}"
            )
        with self._lock:
            self._load()[text_key(text)] = list(vector)
            self._save()

    def clear(self) -> None:
        with self._lock:
            self._embeddings = {}
            if self.path.exists():
                self.path.unlink()


class CachedEmbedder:
    """EmbeddingCapability that consults an EmbeddingCache before the wrapped embedder."""

    def __init__(self, inner: EmbeddingCapability, cache: EmbeddingCache):
        self.inner = inner
        self.cache = cache

    async def embed(self, text: str) -> List[float]:
        cached = self.cache.get(text)
        if cached is not None:
            logger.debug("[embedding_cache] hit")
            return cached
        vector = await self.inner.embed(text)
        try:
            self.cache.put(text, vector)
        except (ValueError, IOError) as e:
            logger.warning("[embedding_cache] not cached: %s", e)
        return vector
