"""
Shared fixtures and fakes for the cache tests.
"""

import fnmatch

import pytest

from nano_llm_cache.config import CacheConfig
from nano_llm_cache.errors import EmbeddingError
from nano_llm_cache.repositories import InMemoryEntryStore
from nano_llm_cache.services import CacheService


class FakeEmbeddingProvider:
    """Embedding provider returning fixed vectors per text."""

    def __init__(self, vectors=None, default=None, model_name="fake-model"):
        self.vectors = dict(vectors or {})
        self.default = default if default is not None else [0.0, 0.0, 1.0]
        self.model_name = model_name
        self.calls = []
        self.fail = False
        self.loaded = False
        self.unload_calls = 0

    async def generate(self, text):
        self.calls.append(text)
        if self.fail:
            raise EmbeddingError("model unavailable")
        self.loaded = True
        return list(self.vectors.get(text, self.default))

    async def unload(self):
        self.loaded = False
        self.unload_calls += 1

    def is_loaded(self):
        return self.loaded


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeRedisPipeline:
    def __init__(self, client):
        self._client = client
        self._ops = []

    def delete(self, *keys):
        self._ops.append(("delete", keys, {}))
        return self

    def hset(self, key, mapping):
        self._ops.append(("hset", (key,), {"mapping": mapping}))
        return self

    def hgetall(self, key):
        self._ops.append(("hgetall", (key,), {}))
        return self

    async def execute(self):
        results = []
        for name, args, kwargs in self._ops:
            results.append(await getattr(self._client, name)(*args, **kwargs))
        self._ops = []
        return results


class FakeRedis:
    """Minimal asyncio Redis stand-in storing hashes as bytes."""

    def __init__(self):
        self.hashes = {}
        self.fail = False

    def _check(self):
        from redis.exceptions import ConnectionError

        if self.fail:
            raise ConnectionError("connection refused")

    @staticmethod
    def _b(value):
        if isinstance(value, bytes):
            return value
        return str(value).encode()

    def pipeline(self):
        return FakeRedisPipeline(self)

    async def hset(self, key, mapping):
        self._check()
        stored = self.hashes.setdefault(self._b(key), {})
        for field, value in mapping.items():
            stored[self._b(field)] = self._b(value)
        return len(mapping)

    async def hgetall(self, key):
        self._check()
        return dict(self.hashes.get(self._b(key), {}))

    async def delete(self, *keys):
        self._check()
        removed = 0
        for key in keys:
            if self.hashes.pop(self._b(key), None) is not None:
                removed += 1
        return removed

    async def scan_iter(self, match="*"):
        self._check()
        for key in list(self.hashes):
            if fnmatch.fnmatchcase(key.decode(), match):
                yield key

    async def ping(self):
        self._check()
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def store():
    return InMemoryEntryStore(prefix="test-cache")


@pytest.fixture
def make_cache(store, provider, clock):
    """Build a CacheService over the shared fakes with config overrides."""

    def _make(**overrides):
        options = {"similarity_threshold": 0.95, "storage_prefix": store.prefix}
        options.update(overrides)
        return CacheService(
            store=store,
            embedding_provider=provider,
            config=CacheConfig(**options),
            clock=clock,
        )

    return _make


@pytest.fixture
def fake_redis():
    return FakeRedis()
