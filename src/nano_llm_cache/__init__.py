"""Nano LLM Cache - semantic caching for LLM calls.

Returns a previously stored response when a new prompt is close enough in
meaning (cosine similarity of embeddings) to one already answered.

Layers:
    - protocols: Interface contracts (EmbeddingProvider, EntryStore)
    - repositories: Collaborator implementations (embeddings, stores)
    - services: Cache engine (hit/miss decision, entry lifecycle)
    - handlers: Chat-completion wrapper
    - dto: Chat-completion data shapes
    - entities: Domain models (internal)

Usage:
    ```python
    from nano_llm_cache import CacheService

    cache = CacheService.create(similarity_threshold=0.95)
    await cache.save("What is the weather in London?", "Cloudy, 15°C")
    result = await cache.query("Tell me the London weather")
    ```
"""

from nano_llm_cache.config import CacheConfig, get_redis_client, settings
from nano_llm_cache.dto import ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from nano_llm_cache.entities import CacheEntryEntity, CacheQueryResult, CacheStatsEntity
from nano_llm_cache.errors import EmbeddingError, InvalidInputError, NanoCacheError, StorageError
from nano_llm_cache.handlers import ChatCompletionHandler, create_chat_wrapper
from nano_llm_cache.protocols import EmbeddingProvider, EntryStore
from nano_llm_cache.repositories import (
    InMemoryEntryStore,
    LocalEmbeddingProvider,
    OllamaEmbeddingProvider,
    RedisEntryStore,
)
from nano_llm_cache.services import CacheService
from nano_llm_cache.similarity import calculate_similarity, normalize_vector

__all__ = [
    # Configuration
    "settings",
    "CacheConfig",
    "get_redis_client",
    # Errors
    "NanoCacheError",
    "InvalidInputError",
    "EmbeddingError",
    "StorageError",
    # Protocols (interfaces)
    "EmbeddingProvider",
    "EntryStore",
    # Services (business logic)
    "CacheService",
    # Handlers (chat wrapper)
    "ChatCompletionHandler",
    "create_chat_wrapper",
    # Repositories (collaborators)
    "InMemoryEntryStore",
    "RedisEntryStore",
    "LocalEmbeddingProvider",
    "OllamaEmbeddingProvider",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheQueryResult",
    "CacheStatsEntity",
    # DTOs (chat shapes)
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    # Similarity
    "calculate_similarity",
    "normalize_vector",
]
