"""Domain entities package."""

from .catalog import Category, Product, ProductImage, VariationGroup, VariationOption
from .customer import Address, Customer
from .settings import (
    ContactInfo,
    DeliverySettings,
    FixedRateSettings,
    Neighborhood,
    NeighborhoodRatesSettings,
    PickupSettings,
    SocialLink,
    StoreSettings,
)

__all__ = [
    "Address",
    "Category",
    "ContactInfo",
    "Customer",
    "DeliverySettings",
    "FixedRateSettings",
    "Neighborhood",
    "NeighborhoodRatesSettings",
    "PickupSettings",
    "Product",
    "ProductImage",
    "SocialLink",
    "StoreSettings",
    "VariationGroup",
    "VariationOption",
]
