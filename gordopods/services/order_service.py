"""Checkout and order administration use cases."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from gordopods.core.exceptions import InvalidOrderTransition, OrderNotFound
from gordopods.domain.cart import CartLedger
from gordopods.domain.delivery import DeliveryQuote
from gordopods.domain.entities import Customer
from gordopods.domain.order import Order
from gordopods.domain.order_fsm import validate_order_transition
from gordopods.domain.value_objects import OrderStatus
from gordopods.infra.orders_repo import OrdersRepository
from gordopods.integrations.cart_storage import CartStorage
from gordopods.services.notifications import Notifier
from gordopods.services.order_assembler import OrderAssembler
from gordopods.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 5


@dataclass
class CheckoutResult:
    order: Order
    whatsapp_url: str | None = None


class OrderService:
    """Coordinates assembly, persistence and notification of orders."""

    def __init__(
        self,
        repo: OrdersRepository,
        notifier: Notifier,
        *,
        assembler: OrderAssembler | None = None,
        carts: CartStorage | None = None,
        settings: SettingsService | None = None,
        whatsapp_number: str = "",
    ) -> None:
        self._repo = repo
        self._notifier = notifier
        self._assembler = assembler or OrderAssembler()
        self._carts = carts
        self._settings = settings
        self._whatsapp_number = whatsapp_number

    async def _unique_order_number(self) -> str:
        number = self._assembler.next_order_number()
        for _ in range(MAX_ORDER_NUMBER_ATTEMPTS - 1):
            if not await self._repo.exists_number(number):
                return number
            logger.warning("Order number %s already used, generating another", number)
            number = self._assembler.next_order_number()
        return number

    async def _destination_number(self) -> str:
        """Store settings win over the number configured in the environment."""
        if self._settings is not None:
            configured = (await self._settings.get_store_settings()).whatsapp_number
            if configured:
                return configured
        return self._whatsapp_number

    async def checkout(
        self,
        cart: CartLedger,
        customer: Customer,
        delivery: DeliveryQuote,
        notes: str = "",
        *,
        session_id: str | None = None,
    ) -> CheckoutResult:
        """Validate, save and send an order, then empty the cart.

        Validation errors are raised before any I/O. PersistenceError from the
        repository is propagated without retry.
        """
        self._assembler.validate(cart, customer, delivery)
        order_number = await self._unique_order_number()
        order = self._assembler.assemble(cart, customer, delivery, notes, order_number=order_number)
        await self._repo.save(order)
        logger.info("Order %s created, total %s", order.order_number, order.total)

        whatsapp_url = None
        whatsapp_number = await self._destination_number()
        if whatsapp_number:
            message = self._assembler.render_summary(order)
            whatsapp_url = await self._notifier.send(whatsapp_number, message)
            order = order.mark_whatsapp_sent()
            await self._repo.save(order)
        else:
            logger.warning("Store WhatsApp number not configured; order %s not sent", order.order_number)

        cart.clear()
        if self._carts is not None and session_id:
            await self._carts.clear(session_id)
        return CheckoutResult(order=order, whatsapp_url=whatsapp_url)

    async def get_order(self, order_id: str) -> Order:
        order = await self._repo.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    async def update_status(self, order_id: str, status: OrderStatus | str) -> Order:
        order = await self.get_order(order_id)
        result = validate_order_transition(current_status=order.status, target_status=status)
        if not result.allowed:
            raise InvalidOrderTransition(order_id, result.reason or "Transição não permitida.")

        target = OrderStatus.normalize(status)
        if target == order.status:
            return order
        updated = order.with_status(target)
        await self._repo.save(updated)
        logger.info("Order %s: %s -> %s", order.order_number, order.status.value, target.value)
        return updated

    async def mark_whatsapp_sent(self, order_id: str) -> Order:
        order = await self.get_order(order_id)
        if order.whatsapp_sent:
            return order
        updated = order.mark_whatsapp_sent()
        await self._repo.save(updated)
        return updated

    async def list_orders(
        self,
        *,
        status: OrderStatus | str | None = None,
        search: str | None = None,
    ) -> list[Order]:
        return await self._repo.list(status=status, search=search)
