"""
Tests for the entry stores.
"""

import json
import struct
from datetime import datetime

import pytest

from nano_llm_cache.entities import CacheEntryEntity
from nano_llm_cache.errors import InvalidInputError, StorageError
from nano_llm_cache.protocols import EntryStore
from nano_llm_cache.repositories import InMemoryEntryStore, RedisEntryStore

pytestmark = pytest.mark.asyncio


def make_entry(prompt="What is the weather in London?", timestamp=1_700_000_000_000, metadata=None):
    return CacheEntryEntity(
        prompt=prompt,
        embedding=(0.5, -0.25, 1.0),
        response="Cloudy, 15°C",
        timestamp=timestamp,
        metadata=metadata,
    )


async def test_stores_satisfy_protocol(fake_redis):
    assert isinstance(InMemoryEntryStore("ns"), EntryStore)
    assert isinstance(RedisEntryStore("ns", redis_client=fake_redis), EntryStore)


async def test_memory_save_get_delete():
    store = InMemoryEntryStore("ns")
    entry = make_entry()

    await store.save("k1", entry)
    assert await store.get("k1") == entry
    assert await store.get("missing") is None

    await store.delete("k1")
    assert await store.get("k1") is None
    await store.delete("k1")


async def test_memory_clear_is_namespace_scoped():
    shared = {}
    a = InMemoryEntryStore("a", shared)
    ab = InMemoryEntryStore("ab", shared)
    await a.save("k", make_entry("one"))
    await ab.save("k", make_entry("two"))

    await a.clear()

    assert await a.get_all() == []
    assert [e.prompt for e in await ab.get_all()] == ["two"]
    assert list(shared) == ["ab:k"]


async def test_redis_round_trip(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)
    entry = make_entry(metadata={"model": "gpt-4o", "tokens": 12})

    await store.save("k1", entry)
    loaded = await store.get("k1")

    assert loaded.prompt == entry.prompt
    assert loaded.response == entry.response
    assert loaded.timestamp == entry.timestamp
    assert loaded.metadata == {"model": "gpt-4o", "tokens": 12}
    # float32 packing is exact for these values
    assert loaded.embedding == entry.embedding


async def test_redis_hash_layout(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)
    await store.save("k1", make_entry())

    raw = fake_redis.hashes[b"ns:k1"]
    assert raw[b"prompt"] == "What is the weather in London?".encode()
    assert raw[b"timestamp"] == b"1700000000000"
    assert struct.unpack("3f", raw[b"embedding"]) == (0.5, -0.25, 1.0)
    assert json.loads(raw[b"metadata"]) is None


async def test_redis_get_all_and_clear_are_namespace_scoped(fake_redis):
    ours = RedisEntryStore("ns", redis_client=fake_redis)
    theirs = RedisEntryStore("ns-other", redis_client=fake_redis)
    await ours.save("k1", make_entry("first"))
    await ours.save("k2", make_entry("second"))
    await theirs.save("k1", make_entry("theirs"))

    assert sorted(e.prompt for e in await ours.get_all()) == ["first", "second"]

    await ours.clear()

    assert await ours.get_all() == []
    assert [e.prompt for e in await theirs.get_all()] == ["theirs"]


async def test_redis_overwrite_replaces_entry(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)
    await store.save("k1", make_entry(metadata={"old": True}))
    await store.save("k1", make_entry(timestamp=5))

    loaded = await store.get("k1")
    assert loaded.timestamp == 5
    assert loaded.metadata is None


async def test_redis_errors_become_storage_errors(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)
    fake_redis.fail = True

    with pytest.raises(StorageError):
        await store.save("k1", make_entry())
    with pytest.raises(StorageError):
        await store.get("k1")
    with pytest.raises(StorageError):
        await store.get_all()
    with pytest.raises(StorageError):
        await store.delete("k1")
    with pytest.raises(StorageError):
        await store.clear()
    assert await store.health_check() is False


async def test_redis_corrupted_entry(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)
    await fake_redis.hset("ns:bad", mapping={"prompt": "p"})

    with pytest.raises(StorageError):
        await store.get("bad")


async def test_memory_prefix_does_not_claim_nested_namespace():
    shared = {}
    app = InMemoryEntryStore("app", shared)
    app_v2 = InMemoryEntryStore("app:v2", shared)
    await app.save("k", make_entry("one"))
    await app_v2.save("k", make_entry("two"))

    assert [e.prompt for e in await app.get_all()] == ["one"]
    assert len(app) == 1

    await app.clear()

    assert [e.prompt for e in await app_v2.get_all()] == ["two"]
    assert list(shared) == ["app:v2:k"]


async def test_redis_prefix_does_not_claim_nested_namespace(fake_redis):
    app = RedisEntryStore("app", redis_client=fake_redis)
    app_v2 = RedisEntryStore("app:v2", redis_client=fake_redis)
    await app.save("k", make_entry("one"))
    await app_v2.save("k", make_entry("two"))

    assert [e.prompt for e in await app.get_all()] == ["one"]

    await app.clear()

    assert await app.get_all() == []
    assert [e.prompt for e in await app_v2.get_all()] == ["two"]
    assert list(fake_redis.hashes) == [b"app:v2:k"]


async def test_keys_with_separator_are_rejected(fake_redis):
    for store in (InMemoryEntryStore("app"), RedisEntryStore("app", redis_client=fake_redis)):
        with pytest.raises(InvalidInputError):
            await store.save("v2:k", make_entry())


async def test_redis_rejects_non_json_metadata(fake_redis):
    store = RedisEntryStore("ns", redis_client=fake_redis)

    with pytest.raises(StorageError, match="JSON-serializable"):
        await store.save("k1", make_entry(metadata={"created": datetime(2024, 1, 1)}))
    assert fake_redis.hashes == {}
