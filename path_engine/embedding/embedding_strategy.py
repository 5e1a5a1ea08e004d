"""
Embedding Strategy for path recommendations

This module defines HOW text is extracted from profiles and templates for
embedding. Changes to this module require re-seeding template embeddings
(bump STRATEGY_VERSION).

Profile text formula (fixed field order: sparks, values, dream):
    Interests and passions: {sparks}
    Core values: {values}
    Aspiration: {dream}

Template text formula:
    {title}. {description}
    Category: {category} - {subcategory}
    Good fit for: {typical_fit.sparks}
    Values: {typical_fit.values}
    Skills: {typical_fit.skills_needed}
"""

from typing import Union

from ..models.profile import UserProfile
from ..models.template import PathTemplate

# Metadata stored alongside seeded embeddings
# IMPORTANT: Bump this version when the embedding logic changes!
STRATEGY_VERSION = "1.0"

# OpenAI embedding configuration (must match the seeded template vectors)
EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_DIMENSIONS = 1536


def get_profile_embed_text(profile: UserProfile) -> str:
    """
    Generate text for embedding from a user profile.

    The same labels are used for every request so that profile vectors stay
    comparable with each other across the catalog's lifetime.
    """
    return "\n".join(
        [
            f"Interests and passions: {', '.join(profile.sparks)}",
            f"Core values: {', '.join(profile.values)}",
            f"Aspiration: {profile.dream.strip()}",
        ]
    )


def get_template_embed_text(template: Union[PathTemplate, dict]) -> str:
    """Generate text for embedding from a path template (used when seeding)."""
    if isinstance(template, dict):
        template = PathTemplate.model_validate(template)
    fit = template.typical_fit
    lines = [f"{template.title}. {template.description or ''}".strip()]
    lines.append(f"Category: {template.category} - {template.subcategory or 'General'}")
    if fit.sparks:
        lines.append(f"Good fit for: {', '.join(fit.sparks)}")
    if fit.values:
        lines.append(f"Values: {', '.join(fit.values)}")
    if fit.skills_needed:
        lines.append(f"Skills: {', '.join(fit.skills_needed)}")
    return "\n".join(lines)
