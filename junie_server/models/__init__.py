"""Pydantic request/response models for the API."""

from .onboarding import (
    OnboardingStatusResponse,
    OnboardingSubmitRequest,
    OnboardingSubmitResponse,
    ProfileResponse,
)
from .options import GenerateOptionsRequest, GenerateOptionsResponse, InlineProfile, OptionsMeta

__all__ = [
    "GenerateOptionsRequest",
    "GenerateOptionsResponse",
    "InlineProfile",
    "OnboardingStatusResponse",
    "OnboardingSubmitRequest",
    "OnboardingSubmitResponse",
    "OptionsMeta",
    "ProfileResponse",
]
