"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .onboarding import router as onboarding_router
from .options import router as options_router
from .root import router as root_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(onboarding_router, prefix="/api/onboarding", tags=["onboarding"])
    app.include_router(options_router, prefix="/api/options", tags=["options"])
