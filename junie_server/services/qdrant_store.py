"""
Qdrant Template Store

Path templates in a Qdrant collection with cosine distance. Each point's
payload is the template metadata (PathTemplate.to_payload()), so search
results are validated straight back into PathTemplate models. Point ids are
UUIDv5 of the template id; the template id itself lives in the payload.

Seeding (ensure_collection + upsert_templates) is used by
scripts/seed_templates.py.
"""

import logging
import os
import uuid
from typing import List, Optional, Sequence, Tuple

from qdrant_client import AsyncQdrantClient, models

from path_engine.models.template import PathTemplate
from path_engine.stores import ensure_templates

logger = logging.getLogger(__name__)

ACTIVE_FILTER = models.Filter(
    must=[models.FieldCondition(key="is_active", match=models.MatchValue(value=True))]
)


def point_id(template_id: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"path-template:{template_id}"))


class QdrantTemplateStore:
    """
    Usage:
        store = QdrantTemplateStore(qdrant_url="http://localhost:6333")
        if await store.count_active():
            hits = await store.retrieve_candidates(vector, threshold=0.5, limit=20)
    """

    def __init__(
        self,
        qdrant_url: Optional[str] = None,
        collection_name: str = "path_templates",
        timeout: float = 30.0,
    ):
        """
        Args:
            qdrant_url: Qdrant server URL (falls back to QDRANT_URL env var)
            collection_name: Collection holding the template points
            timeout: Request timeout in seconds
        """
        self.qdrant_url = qdrant_url or os.environ.get("QDRANT_URL", "http://localhost:6333")
        self.collection_name = collection_name
        self.timeout = timeout
        self._client: Optional[AsyncQdrantClient] = None

    @property
    def client(self) -> AsyncQdrantClient:
        if self._client is None:
            self._client = AsyncQdrantClient(url=self.qdrant_url, timeout=int(self.timeout))
        return self._client

    async def is_available(self) -> bool:
        try:
            await self.client.get_collections()
            return True
        except Exception:
            return False

    async def count_active(self) -> int:
        if not await self.client.collection_exists(self.collection_name):
            logger.warning("[qdrant] collection %s does not exist", self.collection_name)
            return 0
        result = await self.client.count(
            collection_name=self.collection_name,
            count_filter=ACTIVE_FILTER,
            exact=True,
        )
        return result.count

    async def retrieve_candidates(
        self,
        query_vector: Sequence[float],
        threshold: float,
        limit: int,
    ) -> List[Tuple[PathTemplate, float]]:
        if limit <= 0:
            return []
        response = await self.client.query_points(
            collection_name=self.collection_name,
            query=list(query_vector),
            query_filter=ACTIVE_FILTER,
            limit=limit,
            score_threshold=threshold,
            with_payload=True,
        )
        # score_threshold is inclusive in Qdrant; the store contract is strict
        points = [p for p in response.points if p.score > threshold]
        templates, _ = ensure_templates(p.payload or {} for p in points)
        by_id = {t.id: t for t in templates}
        hits = []
        for p in points:
            template = by_id.get(str((p.payload or {}).get("id")))
            if template is not None:
                hits.append((template, float(p.score)))
        return hits

    async def ensure_collection(self, dimensions: int, recreate: bool = False) -> None:
        exists = await self.client.collection_exists(self.collection_name)
        if exists and recreate:
            await self.client.delete_collection(self.collection_name)
            exists = False
        if not exists:
            await self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(size=dimensions, distance=models.Distance.COSINE),
            )
            await self.client.create_payload_index(
                collection_name=self.collection_name,
                field_name="is_active",
                field_schema=models.PayloadSchemaType.BOOL,
            )
            logger.info("[qdrant] created collection %s (%s dims)", self.collection_name, dimensions)

    async def upsert_templates(self, templates: Sequence[PathTemplate]) -> int:
        """Upsert templates that carry embeddings. Returns the number written."""
        points = [
            models.PointStruct(id=point_id(t.id), vector=list(t.embedding), payload=t.to_payload())
            for t in templates
            if t.embedding
        ]
        if points:
            await self.client.upsert(collection_name=self.collection_name, points=points)
        logger.info("[qdrant] upserted %s templates into %s", len(points), self.collection_name)
        return len(points)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
