"""
Fixtures for API tests: an app wired to in-memory fakes.

No network: the embedder, text generator and template store are fakes from
path_engine.tests.conftest; profiles go to a JSON file under tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from junie_server.app import create_app
from junie_server.config import ServerConfig
from junie_server.services import JsonProfileStore
from junie_server.state import AppState
from path_engine.stores import InMemoryTemplateStore
from path_engine.tests.conftest import FakeEmbedder, FakeTextGenerator, make_template

CATALOG = [
    make_template(
        "coach",
        [0.9, 0.1, 0.0],
        title="Online Coaching",
        typical_fit={"sparks": ["Life Coaching"], "values": ["Freedom"]},
        requirements={"startup_cost_range_usd": [0, 100], "min_hours": 10, "risk_level": "low"},
        outcomes={"avg_time_to_first_client_weeks": 6},
    ),
    make_template("writer", [1.0, 0.0, 0.0], title="Freelance Writing"),
    make_template("far", [0.0, 1.0, 0.0], title="Unrelated"),
]


@pytest.fixture
def server_config(tmp_path) -> ServerConfig:
    return ServerConfig(
        openai_api_key=None,
        profiles_json_path=tmp_path / "profiles.json",
        embedding_cache_dir=None,
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def make_client(server_config):
    """
    Build a TestClient; override any collaborator by keyword:
        client = make_client(embedder=FakeEmbedder(error=RuntimeError("down")))
    """

    def _make(**overrides) -> TestClient:
        state = AppState(
            overrides.pop("config", server_config),
            embedder=overrides.pop("embedder", FakeEmbedder()),
            template_store=overrides.pop("template_store", InMemoryTemplateStore(CATALOG)),
            text_generator=overrides.pop("text_generator", FakeTextGenerator()),
            profile_store=overrides.pop(
                "profile_store", JsonProfileStore(server_config.profiles_json_path)
            ),
        )
        assert not overrides, f"unknown overrides: {sorted(overrides)}"
        return TestClient(create_app(state=state))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
