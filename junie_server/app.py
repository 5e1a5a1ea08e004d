"""
Junie path recommendation API: FastAPI app factory.

Use: uvicorn junie_server.server:app
Or:  from junie_server import create_app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import ServerConfig, get_config
from .routes import register_routes
from .state import AppState

logger = logging.getLogger(__name__)


def create_app(config: Optional[ServerConfig] = None, state: Optional[AppState] = None) -> FastAPI:
    """Build FastAPI app with CORS, routes, and a lifespan that warms up and closes the state."""
    config = config or (state.config if state else get_config())
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ok, errors = config.validate()
        for error in errors:
            logger.warning("[startup] config: %s", error)
        await app.state.junie.warm_up()
        logger.info(
            "[startup] Junie API ready (templates=%s, provider=%s, config_ok=%s)",
            config.template_source,
            config.explanation_provider,
            ok,
        )
        yield
        await app.state.junie.close()
        logger.info("[shutdown] Junie API stopped")

    app = FastAPI(
        title="Junie Path Recommendation API",
        description="Personalized career and business path recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    app.state.junie = state or AppState(config)
    return app
