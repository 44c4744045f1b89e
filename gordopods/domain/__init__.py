"""Domain package."""

from .cart import CartLedger, CartLineItem
from .delivery import DeliveryOption, DeliveryQuote, QuoteState
from .entities import (
    Address,
    Category,
    Customer,
    DeliverySettings,
    Neighborhood,
    Product,
    ProductImage,
    StoreSettings,
    VariationGroup,
    VariationOption,
)
from .order import Order, OrderItem
from .pricing import OptionSelection, SelectedVariation
from .value_objects import DeliveryMethod, OrderStatus

__all__ = [
    # Entities
    "Address",
    "Category",
    "Customer",
    "DeliverySettings",
    "Neighborhood",
    "Product",
    "ProductImage",
    "StoreSettings",
    "VariationGroup",
    "VariationOption",
    # Cart and checkout
    "CartLedger",
    "CartLineItem",
    "DeliveryOption",
    "DeliveryQuote",
    "QuoteState",
    "OptionSelection",
    "SelectedVariation",
    "Order",
    "OrderItem",
    # Value Objects
    "DeliveryMethod",
    "OrderStatus",
]
