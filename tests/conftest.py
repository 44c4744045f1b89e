"""Shared pytest fixtures for catalog, delivery and storage tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

from gordopods.domain.entities import (
    DeliverySettings,
    FixedRateSettings,
    Neighborhood,
    NeighborhoodRatesSettings,
    PickupSettings,
    Product,
    ProductImage,
    VariationGroup,
    VariationOption,
)
from gordopods.integrations.stores import MemoryStore

FIXED_NOW = datetime(2024, 5, 10, 14, 30, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def size_group() -> VariationGroup:
    return VariationGroup(
        id="size",
        name="Tamanho",
        required=True,
        multiple_selection=False,
        options=[
            VariationOption(id="P", name="P", price_modifier=0),
            VariationOption(id="M", name="M", price_modifier=500),
            VariationOption(id="G", name="G", price_modifier=1000),
        ],
    )


@pytest.fixture()
def extras_group() -> VariationGroup:
    return VariationGroup(
        id="extras",
        name="Adicionais",
        required=False,
        multiple_selection=True,
        options=[
            VariationOption(id="case", name="Capinha", price_modifier=1500),
            VariationOption(id="strap", name="Cordão", price_modifier=300),
            VariationOption(id="promo", name="Cupom", price_modifier=-9000),
        ],
    )


@pytest.fixture()
def product(size_group, extras_group) -> Product:
    return Product(
        id="P1",
        name="Gordopod Classic",
        price=4990,
        images=[
            ProductImage(id="img-1", url="https://cdn.example/p1-a.jpg", is_main=False, order=0),
            ProductImage(id="img-2", url="https://cdn.example/p1-b.jpg", is_main=True, order=1),
        ],
        variation_groups=[size_group, extras_group],
    )


@pytest.fixture()
def plain_product() -> Product:
    return Product(id="P2", name="Refil", price=1250)


@pytest.fixture()
def delivery_settings() -> DeliverySettings:
    return DeliverySettings(
        pickup=PickupSettings(enabled=True),
        fixed_rate=FixedRateSettings(enabled=True, fee=800, description="Entrega padrão"),
        neighborhood_rates=NeighborhoodRatesSettings(
            enabled=True,
            neighborhoods=[
                Neighborhood(id="centro", name="Centro", fee=500),
                Neighborhood(id="jardins", name="Jardins", fee=1200),
            ],
        ),
    )


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@dataclass
class FakeRedisClient:
    """Async stand-in for redis.asyncio.Redis with decode_responses=True."""

    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)
    setex_calls: list[tuple[str, int]] = field(default_factory=list)
    fail_with: Exception | None = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def get(self, key: str):
        self._maybe_fail()
        return self.data.get(key)

    async def set(self, key: str, value: str):
        self._maybe_fail()
        self.data[key] = value
        self.expiry.pop(key, None)
        return True

    async def setex(self, key: str, ttl: int, value: str):
        self._maybe_fail()
        self.data[key] = value
        self.expiry[key] = ttl
        self.setex_calls.append((key, ttl))
        return True

    async def delete(self, key: str) -> int:
        self._maybe_fail()
        existed = 1 if key in self.data else 0
        self.data.pop(key, None)
        self.expiry.pop(key, None)
        return existed

    async def scan_iter(self, match: str):
        self._maybe_fail()
        prefix = match.rstrip("*")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key


@pytest.fixture()
def fake_redis() -> FakeRedisClient:
    return FakeRedisClient()
