"""Redis implementation of EntryStore.

Each entry is a Redis hash at ``"<prefix>:<key>"`` with the fields
``prompt``, ``response``, ``embedding`` (packed float32), ``timestamp``
(epoch ms) and ``metadata`` (JSON, so metadata must be JSON-serializable).
Namespace operations scan ``"<prefix>:*"`` and skip keys nested one level
deeper, so caches with different prefixes, including ``app`` and
``app:v2``, can share a database.
"""

import json
import re
import struct
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from nano_llm_cache.config import get_redis_client, settings
from nano_llm_cache.entities import CacheEntryEntity
from nano_llm_cache.errors import InvalidInputError, StorageError

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _escape_glob(value: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", value)


def _encode_entry(entry: CacheEntryEntity) -> dict[str, bytes | str]:
    return {
        "prompt": entry.prompt,
        "response": entry.response,
        "embedding": struct.pack(f"{len(entry.embedding)}f", *entry.embedding),
        "timestamp": str(entry.timestamp),
        "metadata": json.dumps(entry.metadata),
    }


def _decode_entry(raw: dict[bytes, bytes]) -> CacheEntryEntity:
    vector_bytes = raw[b"embedding"]
    metadata: dict[str, Any] | None = json.loads(raw.get(b"metadata", b"null"))
    return CacheEntryEntity(
        prompt=raw[b"prompt"].decode(),
        embedding=struct.unpack(f"{len(vector_bytes) // 4}f", vector_bytes),
        response=raw[b"response"].decode(),
        timestamp=int(raw[b"timestamp"]),
        metadata=metadata,
    )


class RedisEntryStore:
    """Redis implementation of the EntryStore protocol.

    This class satisfies the EntryStore protocol through structural
    typing - no explicit inheritance needed.

    Expects a client created with ``decode_responses=False`` since vectors
    are stored as raw bytes.
    """

    def __init__(
        self,
        prefix: str | None = None,
        redis_client: redis.Redis | None = None,
    ) -> None:
        """Initialize the Redis entry store.

        Args:
            prefix: Namespace prefix. Defaults to settings.storage_prefix.
            redis_client: asyncio Redis client. If None, creates default.
        """
        self._prefix = prefix or settings.storage_prefix
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, prefix: str | None = None) -> "RedisEntryStore":
        """Factory method to create RedisEntryStore with defaults.

        Args:
            prefix: Namespace prefix. If None, uses settings.

        Returns:
            Configured RedisEntryStore
        """
        return cls(prefix=prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client

    def _key(self, key: str) -> str:
        if ":" in key:
            raise InvalidInputError(f"Entry key must not contain ':', got {key!r}")
        return f"{self._prefix}:{key}"

    async def _own_keys(self) -> list[bytes]:
        namespace = f"{self._prefix}:".encode()
        pattern = f"{_escape_glob(self._prefix)}:*"
        # The glob also matches nested namespaces such as "<prefix>:v2:<key>"
        return [
            key
            async for key in self._client.scan_iter(match=pattern)
            if b":" not in key[len(namespace):]
        ]

    async def save(self, key: str, entry: CacheEntryEntity) -> None:
        """Store an entry, replacing any previous hash at the same key."""
        redis_key = self._key(key)
        try:
            mapping = _encode_entry(entry)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Metadata for {redis_key} is not JSON-serializable: {e}") from e
        try:
            pipe = self._client.pipeline()
            pipe.delete(redis_key)
            pipe.hset(redis_key, mapping=mapping)
            await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Failed to save entry {redis_key}: {e}") from e

    async def get(self, key: str) -> CacheEntryEntity | None:
        redis_key = self._key(key)
        try:
            raw = await self._client.hgetall(redis_key)
        except RedisError as e:
            raise StorageError(f"Failed to read entry {redis_key}: {e}") from e
        if not raw:
            return None
        try:
            return _decode_entry(raw)
        except (KeyError, ValueError, struct.error) as e:
            raise StorageError(f"Corrupted entry {redis_key}: {e}") from e

    async def get_all(self) -> list[CacheEntryEntity]:
        try:
            keys = await self._own_keys()
            if not keys:
                return []
            pipe = self._client.pipeline()
            for key in keys:
                pipe.hgetall(key)
            rows = await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Failed to read entries under {self._prefix}: {e}") from e

        entries = []
        for key, raw in zip(keys, rows):
            # Deleted between SCAN and HGETALL
            if not raw:
                continue
            try:
                entries.append(_decode_entry(raw))
            except (KeyError, ValueError, struct.error) as e:
                raise StorageError(f"Corrupted entry {key!r}: {e}") from e
        return entries

    async def delete(self, key: str) -> None:
        redis_key = self._key(key)
        try:
            await self._client.delete(redis_key)
        except RedisError as e:
            raise StorageError(f"Failed to delete entry {redis_key}: {e}") from e

    async def clear(self) -> None:
        try:
            keys = await self._own_keys()
            if keys:
                await self._client.delete(*keys)
        except RedisError as e:
            raise StorageError(f"Failed to clear entries under {self._prefix}: {e}") from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible."""
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False
