"""Explicit row <-> domain transforms at the backend boundary.

Backend rows use snake_case columns and decimal prices; legacy browser records
use camelCase keys. Everything past this module sees typed domain objects with
prices in cents.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from gordopods.core.money import to_minor_units
from gordopods.domain.delivery import DeliveryOption
from gordopods.domain.entities import (
    Address,
    Category,
    Customer,
    Product,
    ProductImage,
    StoreSettings,
    VariationGroup,
    VariationOption,
)
from gordopods.domain.order import Order, OrderItem
from gordopods.domain.pricing import SelectedVariation
from gordopods.domain.value_objects import DeliveryMethod, OrderStatus


def _get_field(row: Any, key: str, default: Any = None) -> Any:
    if row is None:
        return default
    if isinstance(row, dict):
        value = row.get(key, default)
    else:
        value = getattr(row, key, default)
    return default if value is None else value


def _cents(value: Any) -> int:
    return to_minor_units(value or 0)


def category_from_row(row: Any) -> Category:
    return Category(
        id=str(_get_field(row, "id")),
        name=_get_field(row, "name", ""),
        description=_get_field(row, "description", ""),
        image_url=_get_field(row, "image_url", ""),
        active=bool(_get_field(row, "active", True)),
        order=int(_get_field(row, "order_position", 0)),
    )


def image_from_row(row: Any) -> ProductImage:
    return ProductImage(
        id=str(_get_field(row, "id")),
        url=_get_field(row, "url", ""),
        is_main=bool(_get_field(row, "is_main", False)),
        order=int(_get_field(row, "order_position", 0)),
    )


def option_from_row(row: Any) -> VariationOption:
    return VariationOption(
        id=str(_get_field(row, "id")),
        name=_get_field(row, "name", ""),
        price_modifier=_cents(_get_field(row, "price_modifier", 0)),
    )


def group_from_row(row: Any, option_rows: Iterable[Any] = ()) -> VariationGroup:
    group_id = str(_get_field(row, "id"))
    return VariationGroup(
        id=group_id,
        name=_get_field(row, "name", ""),
        required=bool(_get_field(row, "required", False)),
        multiple_selection=bool(_get_field(row, "multiple_selection", False)),
        options=[
            option_from_row(option)
            for option in option_rows
            if str(_get_field(option, "group_id", "")) == group_id
        ],
    )


def product_from_row(
    row: Any,
    *,
    image_rows: Iterable[Any] = (),
    group_rows: Iterable[Any] = (),
    option_rows: Iterable[Any] = (),
) -> Product:
    """Build a Product from its row plus related image/group/option rows.

    A product whose rows flag no main image gets its first image (by position)
    promoted through ``set_main_image``; more than one flagged image is reduced
    to the first of them.
    """
    product_id = str(_get_field(row, "id"))
    options = list(option_rows)
    images = sorted(
        (
            image_from_row(image)
            for image in image_rows
            if str(_get_field(image, "product_id", product_id)) == product_id
        ),
        key=lambda image: image.order,
    )
    product = Product(
        id=product_id,
        name=_get_field(row, "name", ""),
        description=_get_field(row, "description", ""),
        price=_cents(_get_field(row, "price", 0)),
        category_id=_get_field(row, "category_id"),
        images=images,
        variation_groups=[
            group_from_row(group, options)
            for group in group_rows
            if str(_get_field(group, "product_id", product_id)) == product_id
        ],
        stock_control=bool(_get_field(row, "stock_control", False)),
        stock_quantity=int(_get_field(row, "stock_quantity", 0)),
        auto_stock_reduction=bool(_get_field(row, "auto_stock_reduction", False)),
        active=bool(_get_field(row, "active", True)),
    )
    if product.images:
        flagged = next((image for image in product.images if image.is_main), product.images[0])
        product.set_main_image(flagged.id)
    return product


def store_settings_from_row(row: Any, defaults: StoreSettings | None = None) -> StoreSettings:
    base = defaults or StoreSettings()
    return base.model_copy(
        update={
            "store_name": _get_field(row, "store_name", base.store_name),
            "logo": _get_field(row, "logo_url", base.logo),
            "banner": _get_field(row, "banner_url", base.banner),
            "description": _get_field(row, "store_description", base.description),
            "whatsapp_number": _get_field(row, "whatsapp_number", base.whatsapp_number),
        },
        deep=True,
    )


def store_settings_to_row(settings: StoreSettings, row_id: str | None = None) -> dict[str, Any]:
    return {
        "id": row_id or str(uuid.uuid4()),
        "store_name": settings.store_name,
        "logo_url": settings.logo,
        "banner_url": settings.banner,
        "store_description": settings.description,
        "whatsapp_number": settings.whatsapp_number,
    }


def order_to_row(order: Order) -> dict[str, Any]:
    return order.to_dict()


def order_from_row(row: dict[str, Any]) -> Order:
    return Order.from_dict(row)


def _variation_from_legacy(record: dict[str, Any]) -> SelectedVariation:
    return SelectedVariation(
        group_id=str(record.get("groupId", "")),
        group_name=str(record.get("groupName", "")),
        option_id=str(record.get("optionId", "")),
        option_name=str(record.get("optionName", "")),
        price_modifier=_cents(record.get("priceModifier", 0)),
    )


def _item_from_legacy(record: dict[str, Any]) -> OrderItem:
    variations = tuple(_variation_from_legacy(v) for v in record.get("selectedVariations") or [])
    quantity = int(record.get("quantity", 1))
    base_price = _cents(record.get("basePrice", 0))
    unit_price = max(0, base_price + sum(v.price_modifier for v in variations))
    return OrderItem(
        product_id=str(record.get("productId", "")),
        product_name=str(record.get("productName", "")),
        quantity=quantity,
        unit_price=unit_price,
        total_price=unit_price * quantity,
        selected_variations=variations,
        image_url=record.get("imageUrl"),
    )


def _customer_from_legacy(record: dict[str, Any]) -> Customer:
    address = record.get("address")
    return Customer(
        name=str(record.get("name", "")),
        phone=str(record.get("phone", "")),
        address=Address(
            street=str(address.get("street", "")),
            number=str(address.get("number", "")),
            complement=str(address.get("complement") or ""),
            district=str(address.get("district", "")),
        )
        if isinstance(address, dict)
        else None,
    )


def _parse_timestamp(value: Any) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # browser records without an offset were written in UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def order_from_legacy_record(record: dict[str, Any]) -> Order:
    """Import an order saved by the browser storefront (camelCase, decimal prices).

    Item and order totals are recomputed from prices instead of being trusted.
    """
    items = tuple(_item_from_legacy(item) for item in record.get("items") or [])
    delivery = record.get("deliveryOption") or {}
    delivery_option = DeliveryOption(
        type=DeliveryMethod.normalize(delivery.get("type") or DeliveryMethod.PICKUP),
        name=str(delivery.get("name", "")),
        fee=_cents(delivery.get("fee", 0)),
        neighborhood_id=delivery.get("neighborhoodId"),
        neighborhood_name=delivery.get("neighborhoodName"),
    )
    subtotal = sum(item.total_price for item in items)
    return Order(
        id=str(record.get("id") or uuid.uuid4()),
        order_number=str(record.get("orderNumber", "")),
        customer=_customer_from_legacy(record.get("customer") or {}),
        items=items,
        subtotal=subtotal,
        delivery_option=delivery_option,
        total=subtotal + delivery_option.fee,
        created_at=_parse_timestamp(record.get("createdAt")),
        notes=str(record.get("notes") or ""),
        status=OrderStatus.normalize(record.get("status")),
        whatsapp_sent=bool(record.get("whatsappSent", False)),
    )
