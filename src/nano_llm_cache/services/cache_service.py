"""Cache service for core business logic.

This service orchestrates cache operations by coordinating the entry store
(data access) and the embedding provider (vector generation). It owns the
hit/miss decision: a linear cosine-similarity scan over every stored entry,
compared against the configured threshold.

Error policy:
- ``query`` fails open. Provider or store failures are logged and reported
  as a miss without similarity.
- ``save`` and ``clear`` propagate failures to the caller.
- ``InvalidInputError`` always propagates (e.g. entries of different
  embedding dimensionality in one namespace).

Concurrency: each call awaits only the provider and the store. There is no
shared mutable state in the service, no single-flight collapsing of
identical concurrent queries, and no timeout around provider calls.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from nano_llm_cache.config import CacheConfig
from nano_llm_cache.entities import CacheEntryEntity, CacheQueryResult, CacheStatsEntity
from nano_llm_cache.errors import InvalidInputError
from nano_llm_cache.protocols import EmbeddingProvider, EntryStore
from nano_llm_cache.repositories import InMemoryEntryStore, LocalEmbeddingProvider
from nano_llm_cache.similarity import calculate_similarity
from nano_llm_cache.utils import hash_prompt

logger = logging.getLogger(__name__)

WARMUP_TEXT = "warmup"


def current_time_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class CacheService:
    """Core semantic cache orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - EntryStore: can be in-memory, Redis, etc.
    - EmbeddingProvider: can be local sentence-transformers, Ollama, etc.

    Example:
        ```python
        from nano_llm_cache.services import CacheService

        # In-memory store + local embeddings
        cache = CacheService.create(similarity_threshold=0.9)

        result = await cache.query("What is the weather in London?")
        if not result.hit:
            answer = await call_llm(...)
            await cache.save("What is the weather in London?", answer)
        ```
    """

    def __init__(
        self,
        store: EntryStore,
        embedding_provider: EmbeddingProvider,
        config: CacheConfig | None = None,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        """Initialize the cache service.

        Args:
            store: Entry store scoped to this cache's namespace (required).
            embedding_provider: Embedding generation service (required).
            config: Cache configuration. Defaults to settings, with the
                    store's prefix and the provider's model name.
            clock: Returns the current time in epoch milliseconds.

        Raises:
            InvalidInputError: If config.storage_prefix disagrees with the store
        """
        if config is None:
            config = CacheConfig.create(
                model_name=embedding_provider.model_name,
                storage_prefix=store.prefix,
            )
        if config.storage_prefix != store.prefix:
            raise InvalidInputError(
                f"Store prefix {store.prefix!r} does not match configured "
                f"storage_prefix {config.storage_prefix!r}"
            )

        self._store = store
        self._embeddings = embedding_provider
        self._config = config
        self._clock = clock

    @classmethod
    def create(
        cls,
        store: EntryStore | None = None,
        embedding_provider: EmbeddingProvider | None = None,
        similarity_threshold: float | None = None,
        max_age: int | None = None,
        model_name: str | None = None,
        debug: bool | None = None,
        storage_prefix: str | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Unset collaborators default to an ``InMemoryEntryStore`` under
        ``storage_prefix`` and a ``LocalEmbeddingProvider`` for ``model_name``.
        Unset options come from settings.

        Args:
            store: Entry store. If None, an in-memory store is created.
            embedding_provider: Embedding provider. If None, a local
                                sentence-transformers provider is created.
            similarity_threshold: Minimum similarity (0-1) for a hit.
            max_age: Maximum entry age in ms (0 = never expire).
            model_name: Embedding model identifier.
            debug: Log hits, misses, saves and model lifecycle.
            storage_prefix: Namespace prefix for entries.

        Returns:
            Configured CacheService instance
        """
        if storage_prefix is None and store is not None:
            storage_prefix = store.prefix
        if model_name is None and embedding_provider is not None:
            model_name = embedding_provider.model_name

        config = CacheConfig.create(
            similarity_threshold=similarity_threshold,
            max_age=max_age,
            model_name=model_name,
            debug=debug,
            storage_prefix=storage_prefix,
        )

        if store is None:
            store = InMemoryEntryStore(prefix=config.storage_prefix)
        if embedding_provider is None:
            embedding_provider = LocalEmbeddingProvider(model_name=config.model_name, debug=config.debug)

        return cls(store=store, embedding_provider=embedding_provider, config=config)

    def _debug(self, msg: str, *args: Any) -> None:
        if self._config.debug:
            logger.info(msg, *args)

    async def remove_expired(self) -> int:
        """Delete every entry whose age has reached the configured max age.

        Returns:
            Number of entries removed (0 when expiration is disabled)

        Raises:
            StorageError: If the store cannot be read or written
        """
        if not self._config.expires:
            return 0

        now = self._clock()
        removed = 0
        for entry in await self._store.get_all():
            if entry.is_expired(now, self._config.max_age):
                await self._store.delete(hash_prompt(entry.prompt))
                removed += 1

        if removed:
            self._debug("Removed %d expired entries", removed)
        return removed

    def _find_best_match(
        self,
        query_embedding: list[float],
        entries: list[CacheEntryEntity],
    ) -> tuple[CacheEntryEntity | None, float]:
        # Strict ">" keeps the first entry observed at the maximum
        best_entry: CacheEntryEntity | None = None
        best_similarity = 0.0
        for entry in entries:
            similarity = calculate_similarity(query_embedding, entry.embedding)
            if best_entry is None or similarity > best_similarity:
                best_entry = entry
                best_similarity = similarity
        return best_entry, best_similarity

    async def query(self, prompt: str) -> CacheQueryResult:
        """Look up a semantically similar cached prompt.

        Business logic:
        1. Sweep expired entries (when max_age is set)
        2. Generate embedding for the query prompt
        3. Scan all stored entries for the best cosine similarity
        4. Hit if the best similarity meets the threshold

        Args:
            prompt: The prompt to search for

        Returns:
            CacheQueryResult. Misses carry the best similarity seen, except
            for an empty store or a failed lookup, which carry none.

        Raises:
            InvalidInputError: If stored and query embeddings differ in length
        """
        try:
            await self.remove_expired()

            query_embedding = await self._embeddings.generate(prompt)
            entries = await self._store.get_all()

            if not entries:
                self._debug("Cache is empty")
                return CacheQueryResult.miss()

            best_entry, best_similarity = self._find_best_match(query_embedding, entries)
        except InvalidInputError:
            raise
        except Exception:
            logger.exception("Query error, treating as cache miss")
            return CacheQueryResult.miss()

        if best_entry is not None and best_similarity >= self._config.similarity_threshold:
            self._debug("Cache HIT! Similarity: %.4f", best_similarity)
            self._debug("Original: %r", best_entry.prompt)
            self._debug("Query: %r", prompt)
            return CacheQueryResult.from_match(best_entry, best_similarity)

        self._debug("Cache MISS. Best similarity: %.4f", best_similarity)
        return CacheQueryResult.miss(best_similarity)

    async def save(
        self,
        prompt: str,
        response: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Store a prompt-response pair in cache.

        Saving a prompt that is already cached replaces the existing entry.

        Args:
            prompt: The original prompt text
            response: The LLM response to cache
            metadata: Optional passthrough metadata (model, tokens, etc.)

        Returns:
            The storage key for the entry

        Raises:
            EmbeddingError: If the prompt cannot be embedded
            StorageError: If the entry cannot be written
        """
        try:
            embedding = await self._embeddings.generate(prompt)
            entry = CacheEntryEntity(
                prompt=prompt,
                embedding=tuple(embedding),
                response=response,
                timestamp=self._clock(),
                metadata=metadata,
            )
            key = hash_prompt(prompt)
            await self._store.save(key, entry)
        except Exception:
            logger.exception("Save error")
            raise

        self._debug("Saved entry for prompt: %r", prompt)
        return key

    async def clear(self) -> None:
        """Delete every entry in this cache's namespace.

        Raises:
            StorageError: If the store cannot be cleared
        """
        await self._store.clear()
        self._debug("Cache cleared")

    async def get_stats(self) -> CacheStatsEntity:
        """Get entry count and timestamp range.

        Does not run the expiration sweep, so entries due to expire on the
        next query are still counted.
        """
        return CacheStatsEntity.from_entries(await self._store.get_all())

    def is_model_loaded(self) -> bool:
        """Check if the embedding model is loaded."""
        return self._embeddings.is_loaded()

    async def preload_model(self) -> None:
        """Load the embedding model now instead of on the first query.

        Raises:
            EmbeddingError: If the model cannot be loaded
        """
        await self._embeddings.generate(WARMUP_TEXT)
        self._debug("Model preloaded")

    async def unload_model(self) -> None:
        """Release the embedding model; the next call reloads it lazily."""
        await self._embeddings.unload()
        self._debug("Model unloaded")

    @property
    def config(self) -> CacheConfig:
        """Get the configuration bound to this cache."""
        return self._config

    @property
    def threshold(self) -> float:
        """Get the similarity threshold."""
        return self._config.similarity_threshold

    @property
    def store(self) -> EntryStore:
        """Get the underlying entry store (for testing)."""
        return self._store

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get the underlying embedding provider (for testing)."""
        return self._embeddings
