"""In-memory cart ledger with merge semantics and always-fresh totals."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from gordopods.core.exceptions import InsufficientStock, InvalidQuantity, ValidationException
from gordopods.domain.entities import Product
from gordopods.domain.pricing import (
    OptionSelection,
    SelectedVariation,
    resolve_selections,
    selection_key,
    unit_price,
    validate_selections,
)


def _check_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(quantity)
    return quantity


def _as_selection(raw: OptionSelection | tuple[str, str]) -> OptionSelection:
    if isinstance(raw, OptionSelection):
        return raw
    group_id, option_id = raw
    return OptionSelection(str(group_id), str(option_id))


@dataclass
class CartLineItem:
    """One cart row: a product, a variation selection and a quantity.

    Prices are frozen at add time; totals are derived, never stored.
    """

    product_id: str
    product_name: str
    base_price: int
    quantity: int
    selected_variations: tuple[SelectedVariation, ...] = ()
    image_url: str | None = None
    max_quantity: int | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def unit_price(self) -> int:
        return unit_price(self.base_price, self.selected_variations)

    @property
    def total_price(self) -> int:
        return self.unit_price * self.quantity

    @property
    def selection_key(self) -> frozenset[tuple[str, str]]:
        return selection_key(self.selected_variations)

    def matches(self, product_id: str, selections: Iterable[SelectedVariation]) -> bool:
        return self.product_id == product_id and self.selection_key == selection_key(selections)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "base_price": int(self.base_price),
            "quantity": int(self.quantity),
            "selected_variations": [v.to_dict() for v in self.selected_variations],
            "image_url": self.image_url,
            "max_quantity": self.max_quantity,
            "total_price": self.total_price,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartLineItem:
        # total_price in the payload is ignored and recomputed
        max_quantity = data.get("max_quantity")
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            product_id=str(data.get("product_id", "")),
            product_name=str(data.get("product_name", "")),
            base_price=int(data.get("base_price", 0)),
            quantity=int(data.get("quantity", 1)),
            selected_variations=tuple(
                SelectedVariation.from_dict(raw)
                for raw in data.get("selected_variations") or []
                if isinstance(raw, dict)
            ),
            image_url=data.get("image_url"),
            max_quantity=int(max_quantity) if max_quantity is not None else None,
        )


class CartLedger:
    """Ordered collection of line items for one customer session."""

    def __init__(self, items: Iterable[CartLineItem] | None = None) -> None:
        self._items: list[CartLineItem] = list(items or [])

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def subtotal(self) -> int:
        return sum(item.total_price for item in self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_id: str) -> CartLineItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def add_item(
        self,
        product: Product,
        quantity: int = 1,
        selections: Iterable[OptionSelection | tuple[str, str]] = (),
    ) -> CartLineItem:
        """Add ``quantity`` of ``product``; identical selections merge into one line."""
        quantity = _check_quantity(quantity)
        if quantity < 1:
            raise InvalidQuantity(quantity)
        if not product.active:
            raise ValidationException(f"Product {product.id} is not available")

        resolved = resolve_selections(
            product.variation_groups, [_as_selection(raw) for raw in selections]
        )
        validate_selections(product.variation_groups, resolved)

        existing = next(
            (item for item in self._items if item.matches(product.id, resolved)), None
        )
        requested = quantity + (existing.quantity if existing else 0)
        if not product.can_supply(requested):
            raise InsufficientStock(product.id, requested, product.stock_quantity)

        if existing is not None:
            existing.quantity = requested
            return existing

        main_image = product.main_image
        item = CartLineItem(
            product_id=product.id,
            product_name=product.name,
            base_price=product.price,
            quantity=quantity,
            selected_variations=tuple(resolved),
            image_url=main_image.url if main_image else None,
            max_quantity=product.stock_quantity if product.stock_control else None,
        )
        self._items.append(item)
        return item

    def set_quantity(self, item_id: str, quantity: int) -> bool:
        """Set a line's quantity using its frozen prices; below 1 removes the line."""
        quantity = _check_quantity(quantity)
        if quantity < 1:
            return self.remove_item(item_id)
        item = self.get(item_id)
        if item is None:
            return False
        if item.max_quantity is not None and quantity > item.max_quantity:
            raise InsufficientStock(item.product_id, quantity, item.max_quantity)
        item.quantity = quantity
        return True

    def remove_item(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) != before

    def clear(self) -> None:
        self._items = []

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self._items],
            "subtotal": self.subtotal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CartLedger:
        if not data or not isinstance(data.get("items"), list):
            return cls()
        items = (CartLineItem.from_dict(raw) for raw in data["items"] if isinstance(raw, dict))
        return cls(item for item in items if item.quantity >= 1)
