"""
Text generation via LiteLLM

Implements the engine's TextGenerationCapability for the "why you" bullets.
Supports OpenAI, Gemini, and Anthropic through one interface; the provider is
chosen by EXPLANATION_PROVIDER.

Usage:
    generator = LiteLLMTextGenerator(provider="anthropic")
    bullets = await generator.generate(prompt)
"""

import json
import os
import re
from typing import Any, Dict, List

import litellm
from litellm import acompletion

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True

# Drop unsupported params for models with restrictions
litellm.drop_params = True


# ============================================================================
# Model Configuration
# ============================================================================

SUPPORTED_MODELS: Dict[str, str] = {
    "openai": "gpt-5-mini",
    "gemini": "gemini/gemini-2.5-flash",
    "anthropic": "claude-sonnet-4-5",
}

# Environment variable names for API keys
API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def get_available_providers() -> List[str]:
    """Providers with an API key configured (e.g. ["openai", "anthropic"])."""
    return [p for p, env_var in API_KEY_ENV_VARS.items() if os.getenv(env_var)]


def is_provider_available(provider: str) -> bool:
    env_var = API_KEY_ENV_VARS.get(provider)
    return bool(env_var and os.getenv(env_var))


def get_model_for_provider(provider: str) -> str:
    """
    Raises:
        ValueError: If provider is not supported
    """
    model = SUPPORTED_MODELS.get(provider)
    if not model:
        raise ValueError(f"Unsupported provider: {provider}. "
                         f"Supported: {list(SUPPORTED_MODELS.keys())}")
    return model


# ============================================================================
# JSON Parsing
# ============================================================================

def parse_json_array(content: str) -> List[Any]:
    """
    Parse a JSON array from an LLM response.

    Handles a bare array, an array in a markdown code block, and an array
    surrounded by other text.

    Raises:
        ValueError: If no JSON array is found
    """
    content = (content or "").strip()

    try:
        parsed = json.loads(content)
        if isinstance(parsed, list):
            return parsed
    except json.JSONDecodeError:
        pass

    match = re.search(r"```(?:json)?\s*(\[[\s\S]*?\])\s*```", content)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    match = re.search(r"\[[\s\S]*\]", content)
    if match:
        try:
            parsed = json.loads(match.group())
            if isinstance(parsed, list):
                return parsed
        except json.JSONDecodeError:
            pass

    raise ValueError(f"Could not parse JSON array from response: {content[:200]}...")


# ============================================================================
# LLM API Calls
# ============================================================================

class LiteLLMTextGenerator:
    """Single-attempt completion call returning the parsed JSON array."""

    def __init__(
        self,
        provider: str = "anthropic",
        temperature: float = 0.7,
        max_tokens: int = 300,
        timeout: float = 30.0,
    ):
        self.provider = provider
        self.model = get_model_for_provider(provider)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @property
    def is_available(self) -> bool:
        return is_provider_available(self.provider)

    async def generate(self, prompt: str) -> List[str]:
        """
        Raises:
            ValueError: If no API key is configured or the response has no JSON array
            Exception: If the LLM API call fails
        """
        if not self.is_available:
            raise ValueError(f"No API key configured for {self.provider}. "
                             f"Set {API_KEY_ENV_VARS[self.provider]} environment variable.")
        response = await acompletion(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
            num_retries=0,
        )
        content = response.choices[0].message.content
        return parse_json_array(content)
