"""
Shared fakes for engine tests.

Embeddings are 3-dimensional so similarities are easy to reason about:
a template embedded at [1, 0, 0] has similarity 1.0 with a profile embedded
at [1, 0, 0] and 0.0 with one at [0, 1, 0].
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from path_engine.models.profile import UserProfile

PROFILE = {
    "sparks": ["Coaching", "Writing"],
    "values": ["Freedom", "Impact"],
    "dream": "Run a small coaching practice that lets me travel",
}


def make_template(template_id: str, embedding: List[float], **overrides) -> Dict[str, Any]:
    record = {
        "id": template_id,
        "title": f"Path {template_id}",
        "category": "business",
        "subcategory": "Services",
        "description": "A curated path",
        "typical_fit": {"sparks": [], "values": [], "skills_needed": []},
        "requirements": None,
        "outcomes": None,
        "plan_template": None,
        "embedding": embedding,
        "is_active": True,
    }
    record.update(overrides)
    return record


class FakeEmbedder:
    """Returns a fixed vector, or raises / sleeps when told to."""

    def __init__(self, vector=None, error: Optional[Exception] = None, delay: float = 0.0):
        self.vector = [1.0, 0.0, 0.0] if vector is None else vector
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.vector


class FakeTextGenerator:
    """
    respond: a list of bullets to return for every prompt, or a callable
    prompt -> bullets (may raise).
    """

    def __init__(self, respond=None, delay: float = 0.0):
        self.respond = respond if respond is not None else ["One", "Two", "Three"]
        self.delay = delay
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> List[str]:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if callable(self.respond):
            return self.respond(prompt)
        return list(self.respond)


class CountingStore:
    """Wraps a store and records calls."""

    def __init__(self, inner):
        self.inner = inner
        self.count_calls = 0
        self.retrieve_calls = 0

    async def count_active(self) -> int:
        self.count_calls += 1
        return await self.inner.count_active()

    async def retrieve_candidates(self, query_vector, threshold, limit):
        self.retrieve_calls += 1
        return await self.inner.retrieve_candidates(query_vector, threshold, limit)


class FailingStore:
    async def count_active(self) -> int:
        raise ConnectionError("store offline")

    async def retrieve_candidates(self, query_vector, threshold, limit):
        raise ConnectionError("store offline")


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile.model_validate(PROFILE)
