import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

from nano_llm_cache.errors import InvalidInputError

load_dotenv()

DEFAULT_MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_STORAGE_PREFIX = "nano-llm-cache"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    similarity_threshold: float = float(os.getenv("NANO_CACHE_SIMILARITY_THRESHOLD", "0.95"))
    max_age: int = int(os.getenv("NANO_CACHE_MAX_AGE", "0"))  # milliseconds, 0 = never expire
    storage_prefix: str = os.getenv("NANO_CACHE_STORAGE_PREFIX", DEFAULT_STORAGE_PREFIX)
    debug: bool = os.getenv("NANO_CACHE_DEBUG", "false").lower() == "true"

    # Embedding
    embedding_model: str = os.getenv("NANO_CACHE_MODEL", DEFAULT_MODEL_NAME)

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.similarity_threshold <= 1:
            raise ValueError("NANO_CACHE_SIMILARITY_THRESHOLD must be between 0 and 1")

        if self.max_age < 0:
            raise ValueError("NANO_CACHE_MAX_AGE must be >= 0 (0 disables expiration)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


@dataclass(frozen=True)
class CacheConfig:
    """Configuration bound to one cache instance at construction.

    Attributes:
        similarity_threshold: Minimum cosine similarity (0-1) for a hit
        max_age: Maximum entry age in milliseconds, 0 = never expire
        model_name: Embedding model identifier
        debug: Emit diagnostic log messages
        storage_prefix: Namespace scoping this cache's entries in the store
    """

    similarity_threshold: float = 0.95
    max_age: int = 0
    model_name: str = DEFAULT_MODEL_NAME
    debug: bool = False
    storage_prefix: str = DEFAULT_STORAGE_PREFIX

    def __post_init__(self) -> None:
        if not 0 <= self.similarity_threshold <= 1:
            raise InvalidInputError(
                f"similarity_threshold must be between 0 and 1, got {self.similarity_threshold}"
            )
        if self.max_age < 0:
            raise InvalidInputError(f"max_age must be >= 0, got {self.max_age}")
        if not self.storage_prefix:
            raise InvalidInputError("storage_prefix must not be empty")

    @classmethod
    def create(
        cls,
        similarity_threshold: float | None = None,
        max_age: int | None = None,
        model_name: str | None = None,
        debug: bool | None = None,
        storage_prefix: str | None = None,
    ) -> "CacheConfig":
        """Build a config, filling unset values from settings.

        Explicit values (including 0 / 0.0 / False) always win over settings.
        """
        return cls(
            similarity_threshold=(
                settings.similarity_threshold if similarity_threshold is None else similarity_threshold
            ),
            max_age=settings.max_age if max_age is None else max_age,
            model_name=model_name or settings.embedding_model,
            debug=settings.debug if debug is None else debug,
            storage_prefix=storage_prefix or settings.storage_prefix,
        )

    @property
    def expires(self) -> bool:
        """Whether entries are subject to the expiration sweep."""
        return self.max_age > 0


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
