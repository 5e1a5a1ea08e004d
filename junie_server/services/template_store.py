"""
JSON template store

Loads a path template catalog from a JSON file ({"templates": [...]} or a bare
list) into path_engine's InMemoryTemplateStore. Records without an embedding
are embedded on load when an embedder is provided (pair it with
CachedEmbedder so restarts do not re-embed); otherwise they are quarantined.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from path_engine.embedding import get_template_embed_text
from path_engine.errors import TemplateValidationError
from path_engine.models.template import PathTemplate
from path_engine.protocols import EmbeddingCapability
from path_engine.stores import InMemoryTemplateStore, validate_template

logger = logging.getLogger(__name__)


def load_template_records(path: Union[Path, str]) -> List[Dict[str, Any]]:
    with open(path) as f:
        data = json.load(f)
    records = data.get("templates", []) if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a list of templates")
    return records


class JsonTemplateStore:
    """
    Usage:
        store = JsonTemplateStore(path, embedder=CachedEmbedder(generator, cache))
        await store.load()
        hits = await store.retrieve_candidates(vector, 0.5, 20)
    """

    def __init__(
        self,
        path: Union[Path, str],
        embedder: Optional[EmbeddingCapability] = None,
        dimensions: Optional[int] = None,
    ):
        self.path = Path(path)
        self.embedder = embedder
        self.dimensions = dimensions
        self._store: Optional[InMemoryTemplateStore] = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    @property
    def quarantined(self) -> List[Tuple[str, str]]:
        return self._store.quarantined if self._store else []

    async def _embed_missing(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        missing = [i for i, r in enumerate(records) if isinstance(r, dict) and not r.get("embedding")]
        if not missing or self.embedder is None:
            return records

        async def embed_one(index: int):
            try:
                template = validate_template(records[index])
            except TemplateValidationError:
                return None  # quarantined by the store with the real reason
            return await self.embedder.embed(get_template_embed_text(template))

        vectors = await asyncio.gather(*(embed_one(i) for i in missing))
        out = list(records)
        for index, vector in zip(missing, vectors):
            if vector is not None:
                out[index] = {**records[index], "embedding": vector}
        logger.info("[templates] embedded %s templates without stored vectors", len(missing))
        return out

    async def load(self) -> int:
        """(Re)load the file. Returns the number of active templates."""
        async with self._lock:
            records = load_template_records(self.path)
            records = await self._embed_missing(records)
            self._store = InMemoryTemplateStore(records, dimensions=self.dimensions)
            active = await self._store.count_active()
            logger.info(
                "[templates] loaded %s active templates from %s (%s quarantined)",
                active,
                self.path,
                len(self._store.quarantined),
            )
            return active

    async def _loaded(self) -> InMemoryTemplateStore:
        if self._store is None:
            await self.load()
        return self._store

    async def count_active(self) -> int:
        store = await self._loaded()
        return await store.count_active()

    async def retrieve_candidates(
        self,
        query_vector: Sequence[float],
        threshold: float,
        limit: int,
    ) -> List[Tuple[PathTemplate, float]]:
        store = await self._loaded()
        return await store.retrieve_candidates(query_vector, threshold, limit)
