"""Application bootstrap wiring storage, repositories and services."""
from __future__ import annotations

from dataclasses import dataclass

from gordopods.core.config import Settings
from gordopods.core.logging import setup_logging
from gordopods.infra.orders_repo import OrdersRepository
from gordopods.integrations.cart_storage import CartStorage
from gordopods.integrations.stores import Store, build_store
from gordopods.services.notifications import WhatsAppLinkNotifier
from gordopods.services.order_service import OrderService
from gordopods.services.settings_service import SettingsService


@dataclass
class Application:
    store: Store
    carts: CartStorage
    orders: OrderService
    settings: SettingsService


def build_application(settings: Settings, store: Store | None = None) -> Application:
    """Create runtime components from configuration."""
    setup_logging(settings.log_level)
    storage = settings.storage
    store = store or build_store(storage)

    carts = CartStorage(
        store,
        ttl_seconds=storage.cart_ttl_seconds,
        key_prefix=storage.key_prefix,
    )
    settings_service = SettingsService(store, key_prefix=storage.key_prefix)
    orders = OrderService(
        OrdersRepository(store, key_prefix=storage.key_prefix),
        WhatsAppLinkNotifier(),
        carts=carts,
        settings=settings_service,
        whatsapp_number=settings.whatsapp_number,
    )
    return Application(
        store=store,
        carts=carts,
        orders=orders,
        settings=settings_service,
    )
