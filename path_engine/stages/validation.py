"""
Profile validation: the first pipeline stage.

Mirrors the onboarding form's own rules so that the engine never scores
against an incomplete profile. Runs before any external call.
"""

from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..errors import InvalidProfile
from ..models.config import EngineConfig, resolve_config
from ..models.profile import UserProfile, ensure_profile


def validate_profile(
    profile: Union[Dict[str, Any], UserProfile],
    config: Optional[EngineConfig] = None,
) -> UserProfile:
    """
    Return the profile as a UserProfile, or raise InvalidProfile naming the
    first missing field (sparks, then values, then dream).
    """
    config = resolve_config(config)
    try:
        profile = ensure_profile(profile)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else "profile"
        raise InvalidProfile(field, first["msg"]) from e

    if not profile.sparks:
        raise InvalidProfile("sparks", "at least one spark is required")
    if not profile.values:
        raise InvalidProfile("values", "at least one value is required")
    if len(profile.dream.strip()) < config.min_dream_length:
        raise InvalidProfile(
            "dream", f"must be at least {config.min_dream_length} characters"
        )
    return profile
