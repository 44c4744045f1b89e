from __future__ import annotations

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from gordopods.core.config import StorageConfig
from gordopods.core.exceptions import PersistenceError
from gordopods.integrations import stores
from gordopods.integrations.stores import FallbackStore, MemoryStore, RedisStore, build_store


class _Clock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_memory_store_roundtrip_is_a_copy(memory_store) -> None:
    payload = {"items": [{"id": "a"}]}
    await memory_store.save("k", payload)
    payload["items"].clear()

    assert await memory_store.load("k") == {"items": [{"id": "a"}]}
    assert await memory_store.load("missing") is None


@pytest.mark.asyncio
async def test_memory_store_ttl_expires(monkeypatch) -> None:
    clock = _Clock()
    monkeypatch.setattr(stores.time, "time", clock)
    store = MemoryStore()

    await store.save("cart:1", {"a": 1}, ttl=60)
    await store.save("cart:2", {"b": 2})
    clock.now += 59
    assert await store.load("cart:1") == {"a": 1}

    clock.now += 1
    assert await store.load("cart:1") is None
    assert await store.keys("cart:") == ["cart:2"]


@pytest.mark.asyncio
async def test_memory_store_save_without_ttl_clears_previous_expiry(monkeypatch) -> None:
    clock = _Clock()
    monkeypatch.setattr(stores.time, "time", clock)
    store = MemoryStore()

    await store.save("k", 1, ttl=10)
    await store.save("k", 2)
    clock.now += 100

    assert await store.load("k") == 2


@pytest.mark.asyncio
async def test_redis_store_uses_setex_for_ttl(fake_redis) -> None:
    store = RedisStore(client=fake_redis)

    await store.save("cart:s1", {"items": []}, ttl=3600)
    await store.save("settings:store", {"store_name": "Gordopods"})

    assert fake_redis.setex_calls == [("cart:s1", 3600)]
    assert "settings:store" not in fake_redis.expiry
    assert await store.load("settings:store") == {"store_name": "Gordopods"}
    assert await store.keys("cart:") == ["cart:s1"]

    await store.delete("cart:s1")
    assert await store.load("cart:s1") is None


@pytest.mark.asyncio
async def test_redis_store_discards_corrupt_json(fake_redis) -> None:
    fake_redis.data["broken"] = "{not json"
    assert await RedisStore(client=fake_redis).load("broken") is None


@pytest.mark.asyncio
async def test_redis_store_wraps_failures(fake_redis) -> None:
    fake_redis.fail_with = RedisConnectionError("connection refused")
    store = RedisStore(client=fake_redis)

    with pytest.raises(PersistenceError):
        await store.load("k")
    with pytest.raises(PersistenceError):
        await store.save("k", 1, ttl=5)
    with pytest.raises(PersistenceError):
        await store.delete("k")
    with pytest.raises(PersistenceError):
        await store.keys("k")


def test_redis_store_requires_url() -> None:
    with pytest.raises(PersistenceError):
        RedisStore()


@pytest.mark.asyncio
async def test_fallback_store_switches_on_first_failure(fake_redis) -> None:
    fallback = MemoryStore()
    store = FallbackStore(RedisStore(client=fake_redis), fallback)

    await store.save("k", {"v": 1})
    assert store.degraded is False
    assert "k" in fake_redis.data

    fake_redis.fail_with = RedisConnectionError("gone")
    await store.save("k", {"v": 2})

    assert store.degraded is True
    assert await fallback.load("k") == {"v": 2}

    # stays on the fallback even after the primary recovers
    fake_redis.fail_with = None
    assert await store.load("k") == {"v": 2}
    assert await store.keys("") == ["k"]


@pytest.mark.asyncio
async def test_fallback_store_load_failure_reads_fallback(fake_redis) -> None:
    fake_redis.fail_with = RedisConnectionError("gone")
    store = FallbackStore(RedisStore(client=fake_redis), MemoryStore())

    assert await store.load("missing") is None
    assert store.degraded is True


def test_build_store_without_redis_is_memory() -> None:
    config = StorageConfig(redis_url=None, key_prefix="t:", cart_ttl_seconds=60)
    assert isinstance(build_store(config), MemoryStore)


def test_build_store_with_redis_has_memory_fallback() -> None:
    config = StorageConfig(redis_url="redis://localhost:6379/0", key_prefix="t:", cart_ttl_seconds=60)
    store = build_store(config)
    assert isinstance(store, FallbackStore)
    assert store.degraded is False
