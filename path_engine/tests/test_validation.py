"""
Profile Validation and Embedding Stage Tests
"""

import asyncio

import pytest

from path_engine.embedding.embedding_strategy import get_profile_embed_text
from path_engine.errors import EmbeddingUnavailable, InvalidProfile
from path_engine.models.config import EngineConfig
from path_engine.models.profile import UserProfile
from path_engine.stages.embedding import ProfileEmbedder
from path_engine.stages.validation import validate_profile
from path_engine.tests.conftest import PROFILE, FakeEmbedder


class TestValidateProfile:
    def test_accepts_dict(self):
        profile = validate_profile(PROFILE)
        assert isinstance(profile, UserProfile)
        assert profile.sparks == ["Coaching", "Writing"]

    def test_terms_are_cleaned(self):
        profile = validate_profile({**PROFILE, "sparks": [" Coaching ", "", "Coaching", None]})
        assert profile.sparks == ["Coaching"]

    def test_blank_sparks_are_missing(self):
        with pytest.raises(InvalidProfile) as exc:
            validate_profile({**PROFILE, "sparks": ["  "]})
        assert exc.value.field == "sparks"

    def test_sparks_checked_before_values(self):
        with pytest.raises(InvalidProfile) as exc:
            validate_profile({"sparks": [], "values": [], "dream": ""})
        assert exc.value.field == "sparks"

    def test_min_dream_length_is_configurable(self):
        config = EngineConfig(min_dream_length=5)
        assert validate_profile({**PROFILE, "dream": "short"}, config).dream == "short"

    def test_exactly_min_length_passes(self):
        assert validate_profile({**PROFILE, "dream": "x" * 20})

    @pytest.mark.parametrize(
        "override,field",
        [
            ({"sparks": 5}, "sparks"),
            ({"values": 3.2}, "values"),
            ({"sparks": {"Coaching": True}}, "sparks"),
        ],
    )
    def test_malformed_terms_are_invalid_profile(self, override, field):
        with pytest.raises(InvalidProfile) as exc:
            validate_profile({**PROFILE, **override})
        assert exc.value.field == field

    @pytest.mark.parametrize("profile", [None, "Coaching", ["Coaching"], 42])
    def test_non_mapping_profile_is_invalid(self, profile):
        with pytest.raises(InvalidProfile) as exc:
            validate_profile(profile)
        assert exc.value.field == "profile"

    def test_error_message_names_field(self):
        with pytest.raises(InvalidProfile, match="dream"):
            validate_profile({**PROFILE, "dream": "too short"})


class TestProfileEmbedder:
    def test_embed_text_field_order(self, profile):
        text = get_profile_embed_text(profile)
        lines = text.splitlines()
        assert lines[0] == "Interests and passions: Coaching, Writing"
        assert lines[1] == "Core values: Freedom, Impact"
        assert lines[2].startswith("Aspiration: Run a small coaching practice")

    def test_returns_vector(self, profile):
        embedder = FakeEmbedder(vector=[0.1, 0.2, 0.3])
        assert asyncio.run(ProfileEmbedder(embedder).embed(profile)) == [0.1, 0.2, 0.3]
        assert embedder.calls == [get_profile_embed_text(profile)]

    def test_error_wraps_cause(self, profile):
        cause = RuntimeError("quota")
        with pytest.raises(EmbeddingUnavailable) as exc:
            asyncio.run(ProfileEmbedder(FakeEmbedder(error=cause)).embed(profile))
        assert exc.value.cause is cause

    def test_non_numeric_vector(self, profile):
        with pytest.raises(EmbeddingUnavailable):
            asyncio.run(ProfileEmbedder(FakeEmbedder(vector=["a", "b"])).embed(profile))
