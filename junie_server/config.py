"""
Server Configuration

Loads configuration from environment variables and provides defaults.
A .env file at the project root is loaded with python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from path_engine.embedding import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL
from path_engine.models.config import EngineConfig

PROJECT_ROOT = Path(__file__).resolve().parent.parent

root_env = PROJECT_ROOT / ".env"
if root_env.exists():
    load_dotenv(root_env)

TEMPLATE_SOURCES = ("json", "qdrant")
EXPLANATION_PROVIDERS = ("anthropic", "openai", "gemini")


@dataclass
class ServerConfig:
    """Server configuration."""

    # API Keys
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Template store: "json" (file loaded into memory) or "qdrant"
    template_source: str = "json"
    templates_json_path: Path = Path(__file__).parent / "data" / "path_templates.json"
    qdrant_url: Optional[str] = None
    qdrant_collection: str = "path_templates"

    # Onboarding profiles
    profiles_json_path: Path = PROJECT_ROOT / "data" / "profiles.json"

    # Embeddings (must match the seeded template vectors)
    embedding_model: str = EMBEDDING_MODEL
    embedding_dimensions: int = EMBEDDING_DIMENSIONS
    # None disables the embedding cache
    embedding_cache_dir: Optional[Path] = PROJECT_ROOT / "cache" / "embeddings"

    # Text generation for "why you" bullets
    explanation_provider: str = "anthropic"

    # Pipeline
    request_timeout_seconds: float = 60.0
    similarity_threshold: float = 0.5
    retrieval_limit: int = 20

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        defaults = cls()

        def _path_env(key: str, default: Optional[Path]) -> Optional[Path]:
            v = os.getenv(key)
            if v is None:
                return default
            if not v.strip():
                return None
            p = Path(v)
            return p if p.is_absolute() else (PROJECT_ROOT / p).resolve()

        template_source = (os.getenv("TEMPLATE_SOURCE") or "json").strip().lower()
        if template_source not in TEMPLATE_SOURCES:
            template_source = "json"
        provider = (os.getenv("EXPLANATION_PROVIDER") or "anthropic").strip().lower()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            template_source=template_source,
            templates_json_path=_path_env("TEMPLATES_JSON_PATH", defaults.templates_json_path),
            qdrant_url=os.getenv("QDRANT_URL") or None,
            qdrant_collection=os.getenv("QDRANT_COLLECTION", "path_templates"),
            profiles_json_path=_path_env("PROFILES_JSON_PATH", defaults.profiles_json_path),
            embedding_model=os.getenv("EMBEDDING_MODEL", EMBEDDING_MODEL),
            embedding_dimensions=int(os.getenv("EMBEDDING_DIMENSIONS", str(EMBEDDING_DIMENSIONS))),
            embedding_cache_dir=_path_env("EMBEDDING_CACHE_DIR", defaults.embedding_cache_dir),
            explanation_provider=provider,
            request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
            similarity_threshold=float(os.getenv("SIMILARITY_THRESHOLD", "0.5")),
            retrieval_limit=int(os.getenv("RETRIEVAL_LIMIT", "20")),
        )

    def engine_config(self) -> EngineConfig:
        """EngineConfig for the orchestrator, built from the server settings."""
        return EngineConfig.from_dict(
            {
                "retrieval": {
                    "similarity_threshold": self.similarity_threshold,
                    "retrieval_limit": self.retrieval_limit,
                },
            }
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.template_source == "json" and not self.templates_json_path.exists():
            errors.append(f"Templates file not found: {self.templates_json_path}")

        if self.template_source == "qdrant" and not self.qdrant_url:
            errors.append("TEMPLATE_SOURCE=qdrant requires QDRANT_URL")

        if self.explanation_provider not in EXPLANATION_PROVIDERS:
            errors.append(
                f"Unknown EXPLANATION_PROVIDER {self.explanation_provider!r}; "
                f"expected one of {', '.join(EXPLANATION_PROVIDERS)}"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("REQUEST_TIMEOUT_SECONDS must be positive")

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        self.profiles_json_path.parent.mkdir(parents=True, exist_ok=True)
        if self.embedding_cache_dir:
            self.embedding_cache_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
