"""Environment-driven configuration objects for the storefront."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from gordopods.core.exceptions import ConfigurationException

DEFAULT_CART_TTL_SECONDS = 24 * 60 * 60


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationException(f"{name} must not be negative")
    return value


@dataclass(slots=True)
class StorageConfig:
    redis_url: str | None
    key_prefix: str
    cart_ttl_seconds: int

    @property
    def redis_enabled(self) -> bool:
        return bool(self.redis_url)


@dataclass(slots=True)
class Settings:
    store_name: str
    whatsapp_number: str
    log_level: str
    storage: StorageConfig


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    storage = StorageConfig(
        redis_url=os.getenv("REDIS_URL") or None,
        key_prefix=os.getenv("STORAGE_KEY_PREFIX", "gordopods:"),
        cart_ttl_seconds=_int_env("CART_TTL_SECONDS", DEFAULT_CART_TTL_SECONDS),
    )

    return Settings(
        store_name=os.getenv("STORE_NAME", "Gordopods"),
        whatsapp_number=os.getenv("STORE_WHATSAPP_NUMBER", ""),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        storage=storage,
    )
