"""Cart persistence per customer session with TTL."""
from __future__ import annotations

import logging

from gordopods.core.config import DEFAULT_CART_TTL_SECONDS
from gordopods.domain.cart import CartLedger
from gordopods.integrations.stores import Store

logger = logging.getLogger(__name__)


class CartStorage:
    """Loads and saves a session's CartLedger through an injected Store."""

    def __init__(
        self,
        store: Store,
        *,
        ttl_seconds: int = DEFAULT_CART_TTL_SECONDS,
        key_prefix: str = "",
    ) -> None:
        self._store = store
        self._ttl = ttl_seconds
        self._prefix = key_prefix

    def _cart_key(self, session_id: str) -> str:
        return f"{self._prefix}cart:{session_id}"

    async def load(self, session_id: str) -> CartLedger:
        payload = await self._store.load(self._cart_key(session_id))
        if not isinstance(payload, dict):
            return CartLedger()
        try:
            return CartLedger.from_dict(payload)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Discarding corrupt cart for session %s: %s", session_id, exc)
            return CartLedger()

    async def save(self, session_id: str, cart: CartLedger) -> None:
        """Persist the cart and refresh its TTL; an empty cart removes the key."""
        if cart.is_empty():
            await self._store.delete(self._cart_key(session_id))
            return
        await self._store.save(self._cart_key(session_id), cart.to_dict(), self._ttl)

    async def clear(self, session_id: str) -> None:
        await self._store.delete(self._cart_key(session_id))
