"""
Candidate retrieval: nearest templates by cosine similarity.

An empty store or an empty filtered result is not an error: the orchestrator
switches to the mock catalog. The store's contract (active only, strictly above
threshold, descending, capped) is re-applied here so a loose store
implementation cannot break ranking order.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..models.config import EngineConfig
from ..models.template import PathTemplate
from ..protocols import TemplateStore

logger = logging.getLogger(__name__)


@dataclass
class RetrievalOutcome:
    """Retrieval result plus why it is empty, when it is."""
    active_count: int
    hits: List[Tuple[PathTemplate, float]] = field(default_factory=list)
    empty_reason: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.hits


async def retrieve_candidates(
    store: TemplateStore,
    query_vector: Sequence[float],
    config: EngineConfig,
) -> RetrievalOutcome:
    """Count active templates, then run the similarity search."""
    active_count = await store.count_active()
    if active_count == 0:
        return RetrievalOutcome(active_count=0, empty_reason="no_active_templates")

    raw_hits = await store.retrieve_candidates(
        query_vector, config.similarity_threshold, config.retrieval_limit
    )
    hits = [
        (template, float(similarity))
        for template, similarity in raw_hits or []
        if template.is_active and similarity > config.similarity_threshold
    ]
    if len(hits) != len(raw_hits or []):
        logger.warning(
            "[retrieval] store returned %s rows outside contract (inactive or below threshold)",
            len(raw_hits or []) - len(hits),
        )
    hits.sort(key=lambda h: -h[1])
    hits = hits[: config.retrieval_limit]

    if not hits:
        return RetrievalOutcome(
            active_count=active_count, empty_reason="no_match_above_threshold"
        )
    return RetrievalOutcome(active_count=active_count, hits=hits)
