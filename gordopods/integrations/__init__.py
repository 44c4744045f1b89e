"""Storage adapters behind the ``Store`` capability."""

from .stores import FallbackStore, MemoryStore, RedisStore, Store, build_store

__all__ = ["FallbackStore", "MemoryStore", "RedisStore", "Store", "build_store"]
