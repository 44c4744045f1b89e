"""Checkout validation and order construction."""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timezone
from typing import Callable

from gordopods.core.exceptions import (
    EmptyCart,
    IncompleteAddress,
    MissingCustomerInfo,
    UnresolvedDelivery,
)
from gordopods.domain.cart import CartLedger
from gordopods.domain.delivery import DeliveryQuote
from gordopods.domain.entities import Customer
from gordopods.domain.order import Order, OrderItem
from gordopods.domain.value_objects import DeliveryMethod, OrderStatus
from gordopods.services.notification_builder import NotificationBuilder

ORDER_SUFFIX_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ORDER_SUFFIX_LENGTH = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_order_number(now: datetime | None = None) -> str:
    """Human-readable order number: last 6 digits of epoch seconds plus a random suffix.

    Not guaranteed unique; callers that own the order history check for collisions.
    """
    moment = now or _utcnow()
    stamp = int(moment.timestamp()) % 1_000_000
    suffix = "".join(secrets.choice(ORDER_SUFFIX_ALPHABET) for _ in range(ORDER_SUFFIX_LENGTH))
    return f"#{stamp:06d}-{suffix}"


class OrderAssembler:
    """Turns a cart, customer data and delivery choice into an Order."""

    def __init__(
        self,
        *,
        number_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] = _utcnow,
        builder: NotificationBuilder | None = None,
    ) -> None:
        self._clock = clock
        self._number_factory = number_factory or (lambda: generate_order_number(self._clock()))
        self._builder = builder or NotificationBuilder()

    def next_order_number(self) -> str:
        return self._number_factory()

    @staticmethod
    def validate(cart: CartLedger, customer: Customer, delivery: DeliveryQuote) -> None:
        """Raise the first checkout validation error, checked in a fixed order."""
        if cart.is_empty():
            raise EmptyCart()

        missing = customer.missing_fields()
        if missing:
            raise MissingCustomerInfo(missing)

        if delivery.method is not DeliveryMethod.PICKUP:
            if customer.address is None:
                raise IncompleteAddress(["street", "number", "district"])
            missing_address = customer.address.missing_fields()
            if missing_address:
                raise IncompleteAddress(missing_address)

        if not delivery.is_resolved:
            raise UnresolvedDelivery()

    def assemble(
        self,
        cart: CartLedger,
        customer: Customer,
        delivery: DeliveryQuote,
        notes: str = "",
        *,
        order_number: str | None = None,
    ) -> Order:
        self.validate(cart, customer, delivery)

        delivery_option = delivery.snapshot()
        snapshot_customer = customer.model_copy(
            update={
                "name": customer.name.strip(),
                "phone": customer.phone.strip(),
                "address": (
                    None
                    if delivery_option.is_pickup or customer.address is None
                    else customer.address.model_copy()
                ),
            },
            deep=True,
        )
        subtotal = cart.subtotal
        return Order(
            id=str(uuid.uuid4()),
            order_number=order_number or self._number_factory(),
            customer=snapshot_customer,
            items=tuple(OrderItem.from_line(line) for line in cart),
            subtotal=subtotal,
            delivery_option=delivery_option,
            total=subtotal + delivery_option.fee,
            created_at=self._clock(),
            notes=(notes or "").strip(),
            status=OrderStatus.NEW,
            whatsapp_sent=False,
        )

    def render_summary(self, order: Order) -> str:
        return self._builder.build_order_message(order)
