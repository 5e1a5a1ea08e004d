"""
API Route Tests

Onboarding submit/status and option generation over the FastAPI app, with
fakes in place of OpenAI, the LLM provider and the template store.
"""

import pytest

from junie_server.config import ServerConfig
from junie_server.services import JsonTemplateStore
from path_engine.stores import InMemoryTemplateStore
from path_engine.tests.conftest import FailingStore, FakeEmbedder, FakeTextGenerator

VALID_SUBMISSION = {
    "user_id": "user-1",
    "sparks": ["Coaching", "Writing"],
    "values": ["Freedom", "Impact"],
    "dream": "Run a small coaching practice that lets me travel",
}


def _submit(client, **overrides):
    return client.post("/api/onboarding/submit", json={**VALID_SUBMISSION, **overrides})


class TestRoot:
    def test_root_lists_endpoints(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "/api/options/generate" in response.json()["endpoints"]["options"]

    def test_health_reports_active_templates(self, client, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        body = client.get("/api/health").json()
        assert body["status"] == "healthy"
        assert body["templates"] == {"source": "json", "active_count": 3}
        assert body["openai"]["available"] is False

    def test_health_survives_store_outage(self, make_client):
        body = make_client(template_store=FailingStore()).get("/api/health").json()
        assert body["templates"]["active_count"] is None


class TestOnboarding:
    def test_submit_stores_cleaned_profile(self, client):
        response = _submit(client, sparks=[" Coaching ", "", "Writing"], dream="  " + VALID_SUBMISSION["dream"])
        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["sparks"] == ["Coaching", "Writing"]
        assert profile["dream"] == VALID_SUBMISSION["dream"]
        assert profile["updated_at"]

    @pytest.mark.parametrize(
        "override",
        [
            {"user_id": "  "},
            {"sparks": []},
            {"sparks": ["  "]},
            {"values": []},
            {"values": ["a", "b", "c", "d"]},
            {"dream": "too short"},
        ],
    )
    def test_submit_rejects_incomplete_answers(self, client, override):
        assert _submit(client, **override).status_code == 400

    def test_status_before_and_after_submit(self, client):
        status = client.get("/api/onboarding/status", params={"user_id": "user-1"})
        assert status.json() == {"has_completed_onboarding": False}

        _submit(client)

        status = client.get("/api/onboarding/status", params={"user_id": "user-1"})
        assert status.json() == {"has_completed_onboarding": True}

    def test_status_requires_user_id(self, client):
        assert client.get("/api/onboarding/status").status_code == 422


class TestGenerateOptions:
    def test_stored_profile_gets_ranked_database_options(self, client):
        _submit(client)
        response = client.post("/api/options/generate", json={"user_id": "user-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["source"] == "database"
        assert body["meta"]["vector_search_results"] == 2
        assert body["meta"]["total_count"] == 2
        assert [o["template_id"] for o in body["options"]] == ["coach", "writer"]
        assert body["options"][0]["why_you"] == ["One", "Two", "Three"]
        assert 1 <= body["options"][0]["fit_score"] <= 5

    def test_inline_profile_with_top_n(self, client):
        response = client.post(
            "/api/options/generate",
            json={"profile": {k: v for k, v in VALID_SUBMISSION.items() if k != "user_id"}, "top_n": 1},
        )
        assert response.status_code == 200
        assert [o["template_id"] for o in response.json()["options"]] == ["coach"]

    def test_empty_catalog_returns_mock_options(self, make_client):
        client = make_client(template_store=InMemoryTemplateStore([]))
        _submit(client)
        body = client.post("/api/options/generate", json={"user_id": "user-1"}).json()

        assert body["meta"]["source"] == "mock"
        assert body["meta"]["vector_search_results"] == 0
        assert len(body["options"]) == 5
        assert "Coaching" in body["options"][0]["why_you"][0]

    def test_unknown_user_is_404(self, client):
        response = client.post("/api/options/generate", json={"user_id": "nobody"})
        assert response.status_code == 404

    def test_request_needs_user_or_profile(self, client):
        assert client.post("/api/options/generate", json={}).status_code == 422

    def test_top_n_out_of_range_is_422(self, client):
        response = client.post("/api/options/generate", json={"user_id": "user-1", "top_n": -1})
        assert response.status_code == 422

    def test_incomplete_inline_profile_names_field(self, client):
        response = client.post(
            "/api/options/generate",
            json={"profile": {"sparks": ["Coaching"], "values": ["Freedom"], "dream": "short"}},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "dream"

    def test_embedding_failure_is_503(self, make_client):
        client = make_client(embedder=FakeEmbedder(error=ConnectionError("openai down")))
        _submit(client)
        response = client.post("/api/options/generate", json={"user_id": "user-1"})
        assert response.status_code == 503

    def test_slow_pipeline_is_504(self, make_client, server_config):
        server_config.request_timeout_seconds = 0.05
        client = make_client(embedder=FakeEmbedder(delay=1.0))
        _submit(client)
        response = client.post("/api/options/generate", json={"user_id": "user-1"})
        assert response.status_code == 504

    def test_slow_explanations_still_return_ranked_options(self, make_client, server_config):
        server_config.request_timeout_seconds = 0.3
        client = make_client(text_generator=FakeTextGenerator(delay=2.0))
        _submit(client)

        response = client.post("/api/options/generate", json={"user_id": "user-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["source"] == "database"
        assert [o["template_id"] for o in body["options"]] == ["coach", "writer"]
        assert body["options"][0]["why_you"][0] == "Matches your interest in Coaching"


class TestLifespan:
    def test_startup_loads_json_catalog(self, make_client):
        store = JsonTemplateStore(ServerConfig().templates_json_path, embedder=FakeEmbedder(), dimensions=3)
        assert not store.is_loaded

        with make_client(template_store=store) as client:
            assert store.is_loaded
            assert client.get("/api/health").json()["templates"]["active_count"] >= 8
