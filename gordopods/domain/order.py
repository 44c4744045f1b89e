"""Order domain types."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from gordopods.domain.cart import CartLineItem
from gordopods.domain.delivery import DeliveryOption
from gordopods.domain.entities import Customer
from gordopods.domain.pricing import SelectedVariation
from gordopods.domain.value_objects import OrderStatus


@dataclass(frozen=True, slots=True)
class OrderItem:
    """Line item as it was when the order was placed."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    total_price: int
    selected_variations: tuple[SelectedVariation, ...] = ()
    image_url: str | None = None

    @classmethod
    def from_line(cls, line: CartLineItem) -> OrderItem:
        return cls(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.total_price,
            selected_variations=tuple(line.selected_variations),
            image_url=line.image_url,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "selected_variations": [v.to_dict() for v in self.selected_variations],
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderItem:
        quantity = int(data.get("quantity", 1))
        unit_price = int(data.get("unit_price", 0))
        return cls(
            product_id=str(data.get("product_id", "")),
            product_name=str(data.get("product_name", "")),
            quantity=quantity,
            unit_price=unit_price,
            total_price=int(data.get("total_price", unit_price * quantity)),
            selected_variations=tuple(
                SelectedVariation.from_dict(raw)
                for raw in data.get("selected_variations") or []
                if isinstance(raw, dict)
            ),
            image_url=data.get("image_url"),
        )


@dataclass(frozen=True)
class Order:
    """Immutable snapshot of a completed checkout."""

    id: str
    order_number: str
    customer: Customer
    items: tuple[OrderItem, ...]
    subtotal: int
    delivery_option: DeliveryOption
    total: int
    created_at: datetime
    notes: str = ""
    status: OrderStatus = OrderStatus.NEW
    whatsapp_sent: bool = False

    @property
    def delivery_fee(self) -> int:
        return self.delivery_option.fee

    def with_status(self, status: OrderStatus) -> Order:
        return dataclasses.replace(self, status=status)

    def mark_whatsapp_sent(self) -> Order:
        return dataclasses.replace(self, whatsapp_sent=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "order_number": self.order_number,
            "customer": self.customer.model_dump(),
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "delivery_option": self.delivery_option.to_dict(),
            "total": self.total,
            "notes": self.notes,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "whatsapp_sent": self.whatsapp_sent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        return cls(
            id=str(data["id"]),
            order_number=str(data.get("order_number", "")),
            customer=Customer.model_validate(data.get("customer") or {}),
            items=tuple(OrderItem.from_dict(raw) for raw in data.get("items") or []),
            subtotal=int(data.get("subtotal", 0)),
            delivery_option=DeliveryOption.from_dict(data.get("delivery_option") or {}),
            total=int(data.get("total", 0)),
            created_at=datetime.fromisoformat(data["created_at"]),
            notes=str(data.get("notes") or ""),
            status=OrderStatus.normalize(data.get("status")),
            whatsapp_sent=bool(data.get("whatsapp_sent", False)),
        )
