"""Option generation: ranked path recommendations for a profile."""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from path_engine.errors import EmbeddingUnavailable, InvalidProfile

from ..models import GenerateOptionsRequest, GenerateOptionsResponse, OptionsMeta
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateOptionsResponse)
async def generate_options(request: GenerateOptionsRequest, state: AppState = Depends(get_state)):
    """
    Recommend paths for a stored profile (user_id) or an inline profile.

    400: profile incomplete (detail names the field)
    404: no stored profile for user_id
    503: profile could not be embedded
    504: embedding did not finish within REQUEST_TIMEOUT_SECONDS

    Later stages never fail the request: past the deadline, retrieval falls
    back to the mock catalog and explanations to the templated bullets.
    """
    started = time.perf_counter()
    if request.user_id and request.user_id.strip():
        profile = state.profile_store.get(request.user_id.strip())
        if not profile:
            raise HTTPException(
                status_code=404, detail="Profile not found. Please complete onboarding first."
            )
    else:
        profile = request.profile.model_dump()

    try:
        result = await state.orchestrator.recommend(
            profile,
            top_n=request.top_n,
            timeout_seconds=state.config.request_timeout_seconds,
        )
    except InvalidProfile as e:
        raise HTTPException(status_code=400, detail={"field": e.field, "reason": e.reason})
    except EmbeddingUnavailable as e:
        if isinstance(e.cause, asyncio.TimeoutError):
            logger.error("[options] embedding timed out: %s", e)
            raise HTTPException(status_code=504, detail="Recommendation timed out")
        logger.error("[options] embedding failed: %s", e)
        raise HTTPException(status_code=503, detail="Failed to create profile embedding")

    return GenerateOptionsResponse(
        options=result.recommendations,
        meta=OptionsMeta(
            total_count=len(result.recommendations),
            source=result.source,
            processing_time_ms=int((time.perf_counter() - started) * 1000),
            vector_search_results=result.diagnostics.candidates_retrieved,
        ),
    )
