"""Store appearance and delivery configuration."""
from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from gordopods.domain.value_objects import DeliveryMethod


class Neighborhood(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1)
    fee: int = Field(0, ge=0, description="Delivery fee in cents")


class PickupSettings(BaseModel):
    enabled: bool = True
    instructions: str = "Retire sua compra em nossa loja"


class FixedRateSettings(BaseModel):
    enabled: bool = False
    fee: int = Field(0, ge=0)
    description: str = "Taxa fixa de entrega"


class NeighborhoodRatesSettings(BaseModel):
    enabled: bool = False
    neighborhoods: list[Neighborhood] = Field(default_factory=list)


class DeliverySettings(BaseModel):
    """Delivery configuration; read-only while a customer checks out."""

    pickup: PickupSettings = Field(default_factory=PickupSettings)
    fixed_rate: FixedRateSettings = Field(default_factory=FixedRateSettings)
    neighborhood_rates: NeighborhoodRatesSettings = Field(default_factory=NeighborhoodRatesSettings)

    def find_neighborhood(self, neighborhood_id: str) -> Optional[Neighborhood]:
        return next(
            (n for n in self.neighborhood_rates.neighborhoods if n.id == neighborhood_id),
            None,
        )

    def available_methods(self) -> list[DeliveryMethod]:
        """Methods a customer may pick; neighborhood rates need at least one neighborhood."""
        methods = []
        if self.pickup.enabled:
            methods.append(DeliveryMethod.PICKUP)
        if self.fixed_rate.enabled:
            methods.append(DeliveryMethod.FIXED_RATE)
        if self.neighborhood_rates.enabled and self.neighborhood_rates.neighborhoods:
            methods.append(DeliveryMethod.NEIGHBORHOOD)
        return methods


class SocialLink(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    url: str


class ContactInfo(BaseModel):
    phone: str = ""
    email: str = ""


class StoreSettings(BaseModel):
    store_name: str = "Gordopods"
    logo: str = ""
    banner: str = ""
    primary_color: str = "#9b87f5"
    secondary_color: str = "#6E59A5"
    description: str = ""
    social_links: list[SocialLink] = Field(default_factory=list)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    whatsapp_number: str = ""
