"""In-memory implementation of EntryStore.

Entries live in a plain dict keyed by ``"<prefix>:<key>"``. Several stores
can share one dict to model namespaces over a common backend; each store
only ever sees keys under its own prefix.
"""

from nano_llm_cache.config import settings
from nano_llm_cache.entities import CacheEntryEntity
from nano_llm_cache.errors import InvalidInputError


class InMemoryEntryStore:
    """Process-local entry store.

    This class satisfies the EntryStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        prefix: str | None = None,
        data: dict[str, CacheEntryEntity] | None = None,
    ) -> None:
        """Initialize the in-memory store.

        Args:
            prefix: Namespace prefix. Defaults to settings.storage_prefix.
            data: Backing dict, shared with other stores if given.
        """
        self._prefix = prefix or settings.storage_prefix
        self._data: dict[str, CacheEntryEntity] = {} if data is None else data

    @classmethod
    def create(cls, prefix: str | None = None) -> "InMemoryEntryStore":
        """Factory method to create InMemoryEntryStore with defaults."""
        return cls(prefix=prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, key: str) -> str:
        if ":" in key:
            raise InvalidInputError(f"Entry key must not contain ':', got {key!r}")
        return f"{self._prefix}:{key}"

    def _own_keys(self) -> list[str]:
        # "app" must not claim "app:v2:<key>", so the rest may not hold a ":"
        namespace = f"{self._prefix}:"
        return [k for k in self._data if k.startswith(namespace) and ":" not in k[len(namespace):]]

    async def save(self, key: str, entry: CacheEntryEntity) -> None:
        self._data[self._key(key)] = entry

    async def get(self, key: str) -> CacheEntryEntity | None:
        return self._data.get(self._key(key))

    async def get_all(self) -> list[CacheEntryEntity]:
        return [self._data[k] for k in self._own_keys()]

    async def delete(self, key: str) -> None:
        self._data.pop(self._key(key), None)

    async def clear(self) -> None:
        for k in self._own_keys():
            del self._data[k]

    def __len__(self) -> int:
        return len(self._own_keys())
