"""Qdrant template store against a fake async client (no server needed)."""

import asyncio
import logging
from types import SimpleNamespace

from junie_server.services import QdrantTemplateStore
from junie_server.services.qdrant_store import point_id
from junie_server.state import AppState
from path_engine.models.template import PathTemplate
from path_engine.tests.conftest import FakeEmbedder, FakeTextGenerator, make_template


class FakeQdrantClient:
    def __init__(self, points=(), exists=True, active=0):
        self.points = list(points)
        self.exists = exists
        self.active = active
        self.upserted = []
        self.queries = []
        self.reachable = True
        self.closed = False

    async def get_collections(self):
        if not self.reachable:
            raise ConnectionError("qdrant down")
        return SimpleNamespace(collections=[])

    async def close(self):
        self.closed = True

    async def collection_exists(self, name):
        return self.exists

    async def count(self, collection_name, count_filter, exact):
        return SimpleNamespace(count=self.active)

    async def query_points(self, **kwargs):
        self.queries.append(kwargs)
        return SimpleNamespace(points=self.points)

    async def upsert(self, collection_name, points):
        self.upserted.extend(points)


def _point(template_id, score, **overrides):
    payload = make_template(template_id, [], **overrides)
    payload.pop("embedding")
    return SimpleNamespace(score=score, payload=payload)


def _store(client):
    store = QdrantTemplateStore("http://qdrant.test:6333", "templates")
    store._client = client
    return store


def test_missing_collection_counts_zero():
    assert asyncio.run(_store(FakeQdrantClient(exists=False)).count_active()) == 0


def test_count_active():
    assert asyncio.run(_store(FakeQdrantClient(active=7)).count_active()) == 7


def test_threshold_is_strict_and_payloads_validated():
    client = FakeQdrantClient(
        points=[
            _point("a", 0.9),
            _point("at-threshold", 0.5),
            _point("broken", 0.8, category="hobby"),
            _point("b", 0.7),
        ]
    )
    hits = asyncio.run(_store(client).retrieve_candidates([1.0, 0.0, 0.0], 0.5, 10))

    assert [(t.id, score) for t, score in hits] == [("a", 0.9), ("b", 0.7)]
    assert client.queries[0]["limit"] == 10
    assert client.queries[0]["score_threshold"] == 0.5


def test_zero_limit_skips_query():
    client = FakeQdrantClient(points=[_point("a", 0.9)])
    assert asyncio.run(_store(client).retrieve_candidates([1.0], 0.5, 0)) == []
    assert client.queries == []


def test_upsert_skips_templates_without_vectors():
    client = FakeQdrantClient()
    templates = [
        PathTemplate.model_validate(make_template("a", [1.0, 0.0, 0.0])),
        PathTemplate.model_validate(make_template("b", [])),
    ]

    assert asyncio.run(_store(client).upsert_templates(templates)) == 1
    assert client.upserted[0].id == point_id("a")
    assert "embedding" not in client.upserted[0].payload


def test_point_id_is_stable():
    assert point_id("coach") == point_id("coach")
    assert point_id("coach") != point_id("writer")


def test_is_available_reflects_connectivity():
    client = FakeQdrantClient()
    assert asyncio.run(_store(client).is_available()) is True
    client.reachable = False
    assert asyncio.run(_store(client).is_available()) is False


def test_app_state_checks_and_closes_qdrant(server_config, caplog):
    client = FakeQdrantClient()
    client.reachable = False
    store = _store(client)
    state = AppState(
        server_config,
        embedder=FakeEmbedder(),
        template_store=store,
        text_generator=FakeTextGenerator(),
    )

    with caplog.at_level(logging.WARNING):
        asyncio.run(state.warm_up())
    assert "not reachable" in caplog.text

    asyncio.run(state.close())
    assert client.closed
    assert store._client is None
