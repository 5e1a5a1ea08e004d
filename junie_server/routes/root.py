"""Root and health endpoints."""

from fastapi import APIRouter, Depends

from path_engine.embedding import STRATEGY_VERSION

from ..services import check_openai_available, is_provider_available
from ..state import AppState, get_state

router = APIRouter()


@router.get("/")
def root():
    return {
        "name": "Junie Path Recommendation API",
        "version": "1.0.0",
        "embedding_strategy": STRATEGY_VERSION,
        "endpoints": {
            "onboarding": ["/api/onboarding/submit", "/api/onboarding/status"],
            "options": ["/api/options/generate"],
            "health": ["/api/health"],
        },
    }


@router.get("/api/health")
async def health(state: AppState = Depends(get_state)):
    config = state.config
    openai_ok, openai_msg = check_openai_available(config.openai_api_key)
    provider = config.explanation_provider
    active = await state.active_template_count()
    return {
        "status": "healthy",
        "openai": {"available": openai_ok, "message": openai_msg},
        "explanations": {
            "provider": provider,
            "available": state.text_generator is not None and is_provider_available(provider),
        },
        "templates": {
            "source": config.template_source,
            "active_count": active,
        },
    }
