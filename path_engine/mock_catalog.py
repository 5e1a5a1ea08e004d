"""
Mock catalog: the fixed fallback shown when no template matches.

The five cards live in fixtures/mock_catalog.json. Text fields may carry
placeholders filled from the profile:

    {sparks[0]|helping others}   first spark, or the default after "|"
    {values[1]|community impact} second value, or the default
    {dream[:30]}                 first 30 characters of the dream

Substitution is pure string work, so the fallback is deterministic.
"""

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models.profile import UserProfile
from .models.recommendation import Recommendation

MOCK_CATALOG_PATH = Path(__file__).parent / "fixtures" / "mock_catalog.json"
MOCK_CATALOG_SIZE = 5

_PLACEHOLDER = re.compile(
    r"\{(?:(?P<terms>sparks|values)\[(?P<index>\d+)\]\|(?P<default>[^{}]*)|dream\[:(?P<chars>\d+)\])\}"
)


def fill_placeholders(text: str, profile: UserProfile) -> str:
    """Single pass: substituted profile text is never re-scanned for placeholders."""

    def replace(match: "re.Match") -> str:
        if match.group("chars") is not None:
            return profile.dream.strip()[: int(match.group("chars"))]
        terms = profile.sparks if match.group("terms") == "sparks" else profile.values
        index = int(match.group("index"))
        return terms[index] if index < len(terms) else match.group("default")

    return _PLACEHOLDER.sub(replace, text)


@lru_cache(maxsize=4)
def _load_entries(path: str) -> tuple:
    with open(path) as f:
        data = json.load(f)
    entries = data.get("entries", [])
    if len(entries) != MOCK_CATALOG_SIZE:
        raise ValueError(
            f"Mock catalog at {path} must have {MOCK_CATALOG_SIZE} entries, got {len(entries)}"
        )
    # Validate once with placeholder text so a broken fixture fails at load
    for entry in entries:
        Recommendation.model_validate(entry)
    return tuple(entries)


def load_mock_catalog(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Raw catalog entries (placeholders unfilled)."""
    return [dict(e) for e in _load_entries(str(path or MOCK_CATALOG_PATH))]


def _fill_entry(entry: Dict[str, Any], profile: UserProfile) -> Dict[str, Any]:
    filled = dict(entry)
    for key in ("title", "first_win"):
        filled[key] = fill_placeholders(entry[key], profile)
    for key in ("why_you", "key_steps", "risks"):
        filled[key] = [fill_placeholders(s, profile) for s in entry.get(key, [])]
    return filled


def build_mock_recommendations(
    profile: UserProfile,
    top_n: Optional[int] = None,
    path: Optional[Path] = None,
) -> List[Recommendation]:
    """Catalog cards personalized with the profile, in catalog order, truncated to top_n."""
    entries = load_mock_catalog(path)
    if top_n is not None:
        entries = entries[:top_n]
    return [Recommendation.model_validate(_fill_entry(e, profile)) for e in entries]
