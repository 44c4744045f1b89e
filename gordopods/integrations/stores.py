"""Key-value ``Store`` capability with Redis and in-memory adapters."""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Protocol

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from gordopods.core.config import StorageConfig
from gordopods.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class Store(Protocol):
    """Async key-value persistence for JSON-compatible payloads."""

    async def load(self, key: str) -> Any | None:
        ...

    async def save(self, key: str, value: Any, ttl: int | None = None) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def keys(self, prefix: str) -> list[str]:
        ...


class MemoryStore:
    """Process-local store; expired entries are purged lazily on access."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}

    def _cleanup_expired(self) -> None:
        now = time.time()
        expired = [key for key, deadline in self._expires_at.items() if deadline <= now]
        for key in expired:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)

    async def load(self, key: str) -> Any | None:
        self._cleanup_expired()
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    async def save(self, key: str, value: Any, ttl: int | None = None) -> None:
        # stored serialized so callers never share mutable state with the store
        self._data[key] = json.dumps(value, ensure_ascii=False)
        if ttl:
            self._expires_at[key] = time.time() + ttl
        else:
            self._expires_at.pop(key, None)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self._expires_at.pop(key, None)

    async def keys(self, prefix: str) -> list[str]:
        self._cleanup_expired()
        return sorted(key for key in self._data if key.startswith(prefix))


class RedisStore:
    """Redis-backed store; every failure surfaces as PersistenceError."""

    def __init__(self, redis_url: str | None = None, *, client: Any | None = None):
        if client is None:
            if not redis_url:
                raise PersistenceError("Redis URL is not configured")
            client = aioredis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        self._client = client

    async def load(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except (RedisError, OSError) as exc:
            raise PersistenceError(f"Redis load failed for {key}: {exc}") from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding corrupt payload at %s", key)
            return None

    async def save(self, key: str, value: Any, ttl: int | None = None) -> None:
        serialized = json.dumps(value, ensure_ascii=False)
        try:
            if ttl:
                await self._client.setex(key, ttl, serialized)
            else:
                await self._client.set(key, serialized)
        except (RedisError, OSError) as exc:
            raise PersistenceError(f"Redis save failed for {key}: {exc}") from exc

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except (RedisError, OSError) as exc:
            raise PersistenceError(f"Redis delete failed for {key}: {exc}") from exc

    async def keys(self, prefix: str) -> list[str]:
        try:
            found = [key async for key in self._client.scan_iter(match=f"{prefix}*")]
        except (RedisError, OSError) as exc:
            raise PersistenceError(f"Redis scan failed for {prefix}: {exc}") from exc
        return sorted(found)


class FallbackStore:
    """Uses ``primary`` until its first failure, then ``fallback`` for good."""

    def __init__(self, primary: Store, fallback: Store):
        self._primary = primary
        self._fallback = fallback
        self._degraded = False

    @property
    def degraded(self) -> bool:
        return self._degraded

    def _switch_to_fallback(self, reason: Exception) -> None:
        logger.warning("Primary store failed, switching to fallback: %s", reason)
        self._degraded = True

    async def load(self, key: str) -> Any | None:
        if not self._degraded:
            try:
                return await self._primary.load(key)
            except PersistenceError as exc:
                self._switch_to_fallback(exc)
        return await self._fallback.load(key)

    async def save(self, key: str, value: Any, ttl: int | None = None) -> None:
        if not self._degraded:
            try:
                await self._primary.save(key, value, ttl)
                return
            except PersistenceError as exc:
                self._switch_to_fallback(exc)
        await self._fallback.save(key, value, ttl)

    async def delete(self, key: str) -> None:
        if not self._degraded:
            try:
                await self._primary.delete(key)
                return
            except PersistenceError as exc:
                self._switch_to_fallback(exc)
        await self._fallback.delete(key)

    async def keys(self, prefix: str) -> list[str]:
        if not self._degraded:
            try:
                return await self._primary.keys(prefix)
            except PersistenceError as exc:
                self._switch_to_fallback(exc)
        return await self._fallback.keys(prefix)


def build_store(config: StorageConfig) -> Store:
    """Redis with in-memory fallback when REDIS_URL is set, memory only otherwise."""
    if not config.redis_enabled:
        logger.warning("REDIS_URL is not set; storage uses in-memory mode")
        return MemoryStore()
    logger.info("Redis storage enabled")
    return FallbackStore(RedisStore(config.redis_url), MemoryStore())
