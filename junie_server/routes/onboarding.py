"""Onboarding: save a user's sparks, values and dream; report completion."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import (
    OnboardingStatusResponse,
    OnboardingSubmitRequest,
    OnboardingSubmitResponse,
    ProfileResponse,
)
from ..services import has_completed_onboarding
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_DREAM_LENGTH = 20
MAX_VALUES = 3


def _clean(items: List[str]) -> List[str]:
    return [i.strip() for i in items if i and i.strip()]


def _validate_submission(request: OnboardingSubmitRequest) -> None:
    if not request.user_id.strip():
        raise HTTPException(status_code=400, detail="user_id is required")
    if not _clean(request.sparks):
        raise HTTPException(status_code=400, detail="At least one spark is required")
    if not 1 <= len(_clean(request.values)) <= MAX_VALUES:
        raise HTTPException(status_code=400, detail=f"1-{MAX_VALUES} values are required")
    if len(request.dream.strip()) < MIN_DREAM_LENGTH:
        raise HTTPException(
            status_code=400, detail=f"Dream must be at least {MIN_DREAM_LENGTH} characters"
        )


@router.post("/submit", response_model=OnboardingSubmitResponse)
def submit_onboarding(request: OnboardingSubmitRequest, state: AppState = Depends(get_state)):
    """Create or replace the user's profile."""
    _validate_submission(request)
    profile = state.profile_store.upsert(
        request.user_id,
        _clean(request.sparks),
        _clean(request.values),
        request.dream.strip(),
    )
    return OnboardingSubmitResponse(profile=ProfileResponse.model_validate(profile))


@router.get("/status", response_model=OnboardingStatusResponse)
def onboarding_status(
    user_id: str = Query(..., description="User ID"),
    state: AppState = Depends(get_state),
):
    profile = state.profile_store.get(user_id)
    return OnboardingStatusResponse(has_completed_onboarding=has_completed_onboarding(profile))
