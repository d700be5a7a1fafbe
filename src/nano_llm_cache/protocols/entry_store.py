"""Entry storage protocol.

Defines the interface for a durable key-value store of cache entries,
scoped to one namespace prefix. Several stores may share one backend
(a dict, a Redis database) as long as their prefixes differ.

Implementations can include:
- In-memory dict (default, process-local)
- Redis (one hash per entry)
"""

from typing import Protocol, runtime_checkable

from nano_llm_cache.entities import CacheEntryEntity


@runtime_checkable
class EntryStore(Protocol):
    """Protocol for cache entry storage backends.

    All operations may raise ``StorageError``. A store with prefix ``app``
    does not see entries of a store with prefix ``app:v2``. Consistency guarantees
    (read-your-writes, atomic single-key writes) are those of the backend.
    """

    @property
    def prefix(self) -> str:
        """Return the namespace prefix this store is scoped to."""
        ...

    async def save(self, key: str, entry: CacheEntryEntity) -> None:
        """Store an entry under ``key``, replacing any existing entry.

        Args:
            key: The entry identifier (without namespace prefix). Must not
                 contain ":", which separates nested namespaces.
            entry: The entry to store
        """
        ...

    async def get(self, key: str) -> CacheEntryEntity | None:
        """Fetch one entry by key.

        Returns:
            The entry, or None if absent
        """
        ...

    async def get_all(self) -> list[CacheEntryEntity]:
        """Fetch every entry in this store's namespace."""
        ...

    async def delete(self, key: str) -> None:
        """Delete one entry by key. Deleting a missing key is a no-op."""
        ...

    async def clear(self) -> None:
        """Delete every entry in this store's namespace, and nothing else."""
        ...
