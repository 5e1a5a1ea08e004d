"""JSON profile store."""

import json

import pytest

from junie_server.services import JsonProfileStore, has_completed_onboarding


def test_upsert_then_get(tmp_path):
    store = JsonProfileStore(tmp_path / "profiles.json")
    saved = store.upsert(" user-1 ", ["Coaching"], ["Freedom"], "Run a coaching practice abroad")

    assert saved["user_id"] == "user-1"
    assert store.get("user-1")["sparks"] == ["Coaching"]
    assert store.get("user-2") is None


def test_upsert_replaces_and_persists(tmp_path):
    path = tmp_path / "profiles.json"
    store = JsonProfileStore(path)
    store.upsert("user-1", ["Coaching"], ["Freedom"], "first dream, long enough to count")
    store.upsert("user-1", ["Writing"], ["Impact"], "second dream, long enough to count")

    reloaded = JsonProfileStore(path)
    assert reloaded.get("user-1")["sparks"] == ["Writing"]
    assert len(json.loads(path.read_text())["profiles"]) == 1


def test_loads_profiles_keyed_by_user(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps({"profiles": {"u": {"sparks": ["Art"], "values": ["Freedom"], "dream": "x"}}}))
    assert JsonProfileStore(path).get("u")["user_id"] == "u"


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text("{not json")
    assert JsonProfileStore(path).get("u") is None


def test_empty_user_id_rejected(tmp_path):
    with pytest.raises(ValueError):
        JsonProfileStore(tmp_path / "profiles.json").upsert("  ", ["a"], ["b"], "dream")


@pytest.mark.parametrize(
    "profile,expected",
    [
        (None, False),
        ({"sparks": ["a"], "values": ["b"], "dream": "d"}, True),
        ({"sparks": [], "values": ["b"], "dream": "d"}, False),
        ({"sparks": ["a"], "values": ["b"], "dream": "   "}, False),
    ],
)
def test_has_completed_onboarding(profile, expected):
    assert has_completed_onboarding(profile) is expected
