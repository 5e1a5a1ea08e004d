"""
User profile model: what the onboarding flow stores and the engine reads.

The engine never mutates a profile. Validation of completeness is done by
stages.validation so that failures surface as InvalidProfile, not as a
pydantic ValidationError.
"""

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import InvalidProfile


def _clean_terms(items: List[str]) -> List[str]:
    """Strip, drop empties, de-duplicate preserving first occurrence."""
    seen = set()
    out = []
    for item in items or []:
        term = (item or "").strip()
        if term and term not in seen:
            seen.add(term)
            out.append(term)
    return out


class UserProfile(BaseModel):
    """
    sparks: self-reported interests, ordered (the first spark is used in copy).
    values: self-reported core values, usually 1-3.
    dream: free-text aspiration.
    """

    model_config = ConfigDict(frozen=True)

    sparks: List[str] = []
    values: List[str] = []
    dream: str = ""

    @field_validator("sparks", "values", mode="before")
    @classmethod
    def _normalize_terms(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        elif not isinstance(v, (list, tuple, set, frozenset)):
            raise ValueError("must be a list of strings")
        return _clean_terms([str(x) for x in v if x is not None])

    @field_validator("dream", mode="before")
    @classmethod
    def _normalize_dream(cls, v):
        return "" if v is None else str(v)

    @property
    def first_spark(self) -> str:
        return self.sparks[0] if self.sparks else ""

    @property
    def first_value(self) -> str:
        return self.values[0] if self.values else ""


def ensure_profile(profile: Union[Dict[str, Any], UserProfile]) -> UserProfile:
    """Convert a dict (API/store payload) to UserProfile."""
    if isinstance(profile, UserProfile):
        return profile
    if not isinstance(profile, dict):
        raise InvalidProfile("profile", f"expected a mapping, got {type(profile).__name__}")
    return UserProfile.model_validate(profile)
