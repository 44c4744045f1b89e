"""Orders repository adapter over the injected Store."""
from __future__ import annotations

import logging

from gordopods.core.exceptions import PersistenceError
from gordopods.domain.order import Order
from gordopods.domain.value_objects import OrderStatus
from gordopods.infra.mapping import order_from_row, order_to_row
from gordopods.integrations.stores import Store

logger = logging.getLogger(__name__)


class OrdersRepository:
    def __init__(self, store: Store, *, key_prefix: str = ""):
        self._store = store
        self._prefix = f"{key_prefix}order:"

    def _order_key(self, order_id: str) -> str:
        return f"{self._prefix}{order_id}"

    async def save(self, order: Order) -> None:
        try:
            await self._store.save(self._order_key(order.id), order_to_row(order))
        except PersistenceError:
            logger.error("Failed to save order %s (%s)", order.id, order.order_number)
            raise

    async def get(self, order_id: str) -> Order | None:
        row = await self._store.load(self._order_key(order_id))
        if not isinstance(row, dict):
            return None
        return order_from_row(row)

    async def all(self) -> list[Order]:
        orders = []
        for key in await self._store.keys(self._prefix):
            row = await self._store.load(key)
            if isinstance(row, dict):
                orders.append(order_from_row(row))
        return orders

    async def list(
        self,
        *,
        status: OrderStatus | str | None = None,
        search: str | None = None,
    ) -> list[Order]:
        """Orders newest first, optionally filtered by status and a search term.

        The search matches the order number, the customer's name
        (case-insensitive) or phone.
        """
        orders = await self.all()
        if status is not None and status != "all":
            wanted = OrderStatus.normalize(status)
            orders = [order for order in orders if order.status == wanted]
        if search:
            term = search.strip().lower()
            orders = [
                order
                for order in orders
                if term in order.order_number.lower()
                or term in order.customer.name.lower()
                or term in order.customer.phone
            ]
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    async def exists_number(self, order_number: str) -> bool:
        return any(order.order_number == order_number for order in await self.all())
