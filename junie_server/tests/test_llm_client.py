"""LiteLLM text generation: provider selection and JSON array parsing."""

import asyncio
from types import SimpleNamespace

import pytest

from junie_server.services import llm_client
from junie_server.services.llm_client import (
    LiteLLMTextGenerator,
    get_available_providers,
    get_model_for_provider,
    parse_json_array,
)


class TestParseJsonArray:
    def test_bare_array(self):
        assert parse_json_array('["a", "b", "c"]') == ["a", "b", "c"]

    def test_markdown_code_block(self):
        assert parse_json_array('```json\n["a", "b", "c"]\n```') == ["a", "b", "c"]

    def test_array_inside_prose(self):
        content = 'Here you go:\n["Uses your writing", "Fits freedom", "Matches travel"]\nEnjoy!'
        assert parse_json_array(content)[0] == "Uses your writing"

    @pytest.mark.parametrize("content", ["", "no array here", '{"a": 1}', None])
    def test_no_array_raises(self, content):
        with pytest.raises(ValueError):
            parse_json_array(content)


class TestProviders:
    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_model_for_provider("mystery")

    def test_available_providers_follow_env(self, monkeypatch):
        for env_var in llm_client.API_KEY_ENV_VARS.values():
            monkeypatch.delenv(env_var, raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "test")
        assert get_available_providers() == ["gemini"]


class TestGenerate:
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        generator = LiteLLMTextGenerator(provider="anthropic")
        assert not generator.is_available
        with pytest.raises(ValueError):
            asyncio.run(generator.generate("prompt"))

    def test_single_attempt_returns_parsed_array(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test")
        calls = []

        async def fake_acompletion(**kwargs):
            calls.append(kwargs)
            message = SimpleNamespace(content='```json\n["One", "Two", "Three"]\n```')
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        monkeypatch.setattr(llm_client, "acompletion", fake_acompletion)
        generator = LiteLLMTextGenerator(provider="openai", max_tokens=123)

        assert asyncio.run(generator.generate("Explain")) == ["One", "Two", "Three"]
        assert calls[0]["model"] == llm_client.SUPPORTED_MODELS["openai"]
        assert calls[0]["num_retries"] == 0
        assert calls[0]["max_tokens"] == 123
        assert calls[0]["messages"] == [{"role": "user", "content": "Explain"}]
