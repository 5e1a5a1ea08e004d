"""Application state: the orchestrator and the collaborators it was built from."""

import logging
from typing import Any, Optional

from fastapi import Request

from path_engine import RecommendationOrchestrator
from path_engine.protocols import EmbeddingCapability, TemplateStore, TextGenerationCapability

from .config import ServerConfig
from .services import (
    CachedEmbedder,
    EmbeddingCache,
    EmbeddingGenerator,
    JsonProfileStore,
    JsonTemplateStore,
    LiteLLMTextGenerator,
    ProfileStore,
    QdrantTemplateStore,
)

logger = logging.getLogger(__name__)


class AppState:
    """
    Holds one RecommendationOrchestrator per app. Any collaborator can be
    passed in (tests inject fakes); the rest are built from config.
    """

    def __init__(
        self,
        config: ServerConfig,
        embedder: Optional[EmbeddingCapability] = None,
        template_store: Optional[TemplateStore] = None,
        text_generator: Optional[TextGenerationCapability] = None,
        profile_store: Optional[ProfileStore] = None,
    ):
        self.config = config
        self.embedder = embedder or self._create_embedder(config)
        self.template_store = template_store or self._create_template_store(config)
        self.text_generator = text_generator or self._create_text_generator(config)
        self.profile_store = profile_store or JsonProfileStore(config.profiles_json_path)
        self.orchestrator = RecommendationOrchestrator(
            self.embedder,
            self.template_store,
            self.text_generator,
            config=config.engine_config(),
        )
        logger.info(
            "[startup] embedder=%s template_store=%s text_generator=%s",
            type(self.embedder).__name__,
            type(self.template_store).__name__,
            type(self.text_generator).__name__ if self.text_generator else None,
        )

    def _create_embedder(self, config: ServerConfig) -> EmbeddingCapability:
        generator = EmbeddingGenerator(
            api_key=config.openai_api_key,
            model=config.embedding_model,
            dimensions=config.embedding_dimensions,
        )
        if not config.embedding_cache_dir:
            return generator
        cache = EmbeddingCache(
            config.embedding_cache_dir, config.embedding_model, config.embedding_dimensions
        )
        return CachedEmbedder(generator, cache)

    def _create_template_store(self, config: ServerConfig) -> TemplateStore:
        if config.template_source == "qdrant":
            return QdrantTemplateStore(config.qdrant_url, config.qdrant_collection)
        return JsonTemplateStore(
            config.templates_json_path,
            embedder=self.embedder,
            dimensions=config.embedding_dimensions,
        )

    def _create_text_generator(self, config: ServerConfig) -> Optional[TextGenerationCapability]:
        """None when the provider has no key: every card then uses the fallback bullets."""
        try:
            generator = LiteLLMTextGenerator(provider=config.explanation_provider)
        except ValueError as e:
            logger.warning("[startup] text generation disabled: %s", e)
            return None
        if not generator.is_available:
            logger.warning(
                "[startup] no API key for %s, using fallback explanations", config.explanation_provider
            )
            return None
        return generator

    async def warm_up(self) -> None:
        """Load the JSON catalog up front, or check that Qdrant answers."""
        if isinstance(self.template_store, JsonTemplateStore):
            try:
                await self.template_store.load()
            except Exception as e:
                logger.warning("[startup] template catalog not loaded: %s", e)
        elif isinstance(self.template_store, QdrantTemplateStore):
            if not await self.template_store.is_available():
                logger.warning(
                    "[startup] qdrant at %s not reachable, requests will use the mock catalog",
                    self.template_store.qdrant_url,
                )

    async def close(self) -> None:
        if isinstance(self.template_store, QdrantTemplateStore):
            await self.template_store.close()

    async def active_template_count(self) -> Optional[int]:
        try:
            return await self.template_store.count_active()
        except Exception as e:
            logger.warning("[health] template store unavailable: %s", e)
            return None


def get_state(request: Request) -> Any:
    """FastAPI dependency: the AppState attached by create_app()."""
    return request.app.state.junie
