"""Value Objects for domain model."""
from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle status."""

    NEW = "new"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def normalize(cls, status: str | OrderStatus | None) -> OrderStatus:
        """Accept enum members, raw values and the legacy pt-BR ``Novo``."""
        if isinstance(status, cls):
            return status
        raw = str(status or "").strip().lower()
        legacy = {"": cls.NEW, "novo": cls.NEW}
        if raw in legacy:
            return legacy[raw]
        return cls(raw)


class DeliveryMethod(str, Enum):
    """Mutually exclusive fulfilment choices."""

    PICKUP = "pickup"
    FIXED_RATE = "fixed_rate"
    NEIGHBORHOOD = "neighborhood"

    @classmethod
    def normalize(cls, method: str | DeliveryMethod) -> DeliveryMethod:
        if isinstance(method, cls):
            return method
        raw = str(method).strip()
        aliases = {"fixedRate": cls.FIXED_RATE, "fixed-rate": cls.FIXED_RATE}
        if raw in aliases:
            return aliases[raw]
        return cls(raw.lower())
