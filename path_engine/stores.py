"""
Template store boundary: record validation and an in-memory cosine store.

ensure_templates() turns raw records (JSON / database rows / vector-store
payloads) into PathTemplate models. Records that fail validation are
quarantined: logged and skipped, never passed to scoring.

InMemoryTemplateStore implements the TemplateStore protocol over a list of
templates with precomputed embeddings. Used for JSON-backed catalogs and tests.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import ValidationError

from .errors import TemplateValidationError
from .models.template import PathTemplate
from .utils.similarity import cosine_similarities

logger = logging.getLogger(__name__)

TemplateRecord = Union[Dict[str, Any], PathTemplate]


def validate_template(
    record: TemplateRecord,
    require_embedding: bool = False,
    dimensions: Optional[int] = None,
) -> PathTemplate:
    """
    Validate one record. Raises TemplateValidationError when malformed.

    require_embedding: the record must carry a non-empty vector.
    dimensions: when set, a non-empty vector must have exactly this length.
    """
    if not isinstance(record, (dict, PathTemplate)):
        raise TemplateValidationError("<missing>", f"expected a mapping, got {type(record).__name__}")
    record_id = str(
        (record.id if isinstance(record, PathTemplate) else record.get("id")) or "<missing>"
    )
    if isinstance(record, PathTemplate):
        template = record
    else:
        try:
            template = PathTemplate.model_validate(record)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise TemplateValidationError(record_id, errors) from e
    if require_embedding and not template.embedding:
        raise TemplateValidationError(record_id, "missing embedding")
    if dimensions is not None and template.embedding and len(template.embedding) != dimensions:
        raise TemplateValidationError(
            record_id,
            f"embedding has {len(template.embedding)} dimensions, expected {dimensions}",
        )
    return template


def ensure_templates(
    records: Iterable[TemplateRecord],
    require_embedding: bool = False,
    dimensions: Optional[int] = None,
) -> Tuple[List[PathTemplate], List[Tuple[str, str]]]:
    """
    Validate records, quarantining malformed ones.

    When require_embedding is set and dimensions is None, the dimensionality is
    taken from the first valid record and enforced on the rest.

    Returns:
        (templates, quarantined) where quarantined is a list of (record_id, reason).
    """
    templates: List[PathTemplate] = []
    quarantined: List[Tuple[str, str]] = []
    seen_ids = set()
    for record in records:
        try:
            template = validate_template(record, require_embedding, dimensions)
        except TemplateValidationError as e:
            logger.warning("[quarantine] template=%s reason=%s", e.record_id, e.reason)
            quarantined.append((e.record_id, e.reason))
            continue
        if template.id in seen_ids:
            logger.warning("[quarantine] template=%s reason=duplicate id", template.id)
            quarantined.append((template.id, "duplicate id"))
            continue
        if require_embedding and dimensions is None:
            dimensions = len(template.embedding)
        seen_ids.add(template.id)
        templates.append(template)
    return templates, quarantined


class InMemoryTemplateStore:
    """
    Template store over an in-memory list.

    Usage:
        store = InMemoryTemplateStore(records)
        if await store.count_active():
            hits = await store.retrieve_candidates(vector, threshold=0.5, limit=20)
    """

    def __init__(
        self,
        records: Iterable[TemplateRecord] = (),
        dimensions: Optional[int] = None,
    ):
        templates, quarantined = ensure_templates(
            records, require_embedding=True, dimensions=dimensions
        )
        self.quarantined = quarantined
        self._templates = templates
        self._active = [t for t in templates if t.is_active]
        self.dimensions = dimensions or (len(templates[0].embedding) if templates else None)
        self._matrix = (
            np.asarray([t.embedding for t in self._active], dtype=float)
            if self._active
            else np.empty((0, self.dimensions or 0))
        )

    @property
    def templates(self) -> List[PathTemplate]:
        return list(self._templates)

    async def count_active(self) -> int:
        return len(self._active)

    async def retrieve_candidates(
        self,
        query_vector: Sequence[float],
        threshold: float,
        limit: int,
    ) -> List[Tuple[PathTemplate, float]]:
        if not self._active or limit <= 0:
            return []
        if self.dimensions is not None and len(query_vector) != self.dimensions:
            raise ValueError(
                f"Query vector has {len(query_vector)} dimensions, store has {self.dimensions}"
            )
        sims = cosine_similarities(self._matrix, query_vector)
        # Stable: equal similarities keep catalog order
        order = sorted(range(len(sims)), key=lambda i: -sims[i])
        hits = [(self._active[i], sims[i]) for i in order if sims[i] > threshold]
        return hits[:limit]
