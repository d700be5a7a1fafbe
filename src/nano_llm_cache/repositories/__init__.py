"""Repository layer for data access.

This layer abstracts external collaborators (embedding models, key-value
stores) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (in-memory → Redis, local → Ollama, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from nano_llm_cache.protocols import EmbeddingProvider, EntryStore

from .local_embedding_provider import LocalEmbeddingProvider
from .memory_repository import InMemoryEntryStore
from .ollama_embedding_provider import OllamaEmbeddingProvider
from .redis_repository import RedisEntryStore

__all__ = [
    "EmbeddingProvider",
    "EntryStore",
    "InMemoryEntryStore",
    "LocalEmbeddingProvider",
    "OllamaEmbeddingProvider",
    "RedisEntryStore",
]
