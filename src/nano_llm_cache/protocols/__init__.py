"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, local → Ollama, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from nano_llm_cache.protocols import EmbeddingProvider, EntryStore

    store: EntryStore = InMemoryEntryStore(prefix="docs")   # works
    store: EntryStore = RedisEntryStore(prefix="docs")      # also works
    ```
"""

from .embedding_provider import EmbeddingProvider
from .entry_store import EntryStore

__all__ = [
    "EmbeddingProvider",
    "EntryStore",
]
