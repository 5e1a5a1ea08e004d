"""Request/response models for onboarding (profile submit and status)."""

from typing import List, Optional

from pydantic import BaseModel


class OnboardingSubmitRequest(BaseModel):
    """Onboarding answers. Completeness is checked by the route (400 with a reason)."""

    user_id: str
    sparks: List[str] = []
    values: List[str] = []
    dream: str = ""


class ProfileResponse(BaseModel):
    user_id: str
    sparks: List[str]
    values: List[str]
    dream: str
    updated_at: Optional[str] = None


class OnboardingSubmitResponse(BaseModel):
    success: bool = True
    profile: ProfileResponse


class OnboardingStatusResponse(BaseModel):
    has_completed_onboarding: bool
