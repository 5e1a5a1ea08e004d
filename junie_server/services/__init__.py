"""External-capability adapters: embeddings, text generation, template and profile stores."""

from .embedding_cache import CachedEmbedder, EmbeddingCache
from .embedding_generator import EmbeddingGenerator, check_openai_available
from .llm_client import (
    LiteLLMTextGenerator,
    get_available_providers,
    is_provider_available,
    parse_json_array,
)
from .profile_store import JsonProfileStore, ProfileStore, has_completed_onboarding
from .qdrant_store import QdrantTemplateStore
from .template_store import JsonTemplateStore, load_template_records

__all__ = [
    "CachedEmbedder",
    "EmbeddingCache",
    "EmbeddingGenerator",
    "JsonProfileStore",
    "JsonTemplateStore",
    "LiteLLMTextGenerator",
    "ProfileStore",
    "QdrantTemplateStore",
    "check_openai_available",
    "get_available_providers",
    "has_completed_onboarding",
    "is_provider_available",
    "load_template_records",
    "parse_json_array",
]
