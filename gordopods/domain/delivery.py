"""Delivery method selection and fee resolution."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from gordopods.core.exceptions import DeliveryMethodUnavailable, UnknownNeighborhood
from gordopods.domain.entities import DeliverySettings
from gordopods.domain.value_objects import DeliveryMethod

PICKUP_LABEL = "Retirada no local"
FIXED_RATE_LABEL = "Taxa fixa"
NEIGHBORHOOD_PENDING_LABEL = "bairro selecionado"


class QuoteState(str, Enum):
    PICKUP = "pickup"
    FIXED_RATE = "fixed_rate"
    NEIGHBORHOOD_PENDING = "neighborhood_pending"
    NEIGHBORHOOD_RESOLVED = "neighborhood_resolved"


@dataclass(frozen=True, slots=True)
class DeliveryOption:
    """Delivery choice frozen into an order."""

    type: DeliveryMethod
    name: str
    fee: int
    neighborhood_id: str | None = None
    neighborhood_name: str | None = None

    @property
    def is_pickup(self) -> bool:
        return self.type is DeliveryMethod.PICKUP

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "fee": int(self.fee),
            "neighborhood_id": self.neighborhood_id,
            "neighborhood_name": self.neighborhood_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeliveryOption:
        return cls(
            type=DeliveryMethod.normalize(data.get("type") or DeliveryMethod.PICKUP),
            name=str(data.get("name", "")),
            fee=int(data.get("fee", 0)),
            neighborhood_id=data.get("neighborhood_id"),
            neighborhood_name=data.get("neighborhood_name"),
        )


class DeliveryQuote:
    """State machine over the customer's delivery choice.

    Fees are frozen when a method or neighborhood is selected; switching methods
    always drops the previous neighborhood.
    """

    def __init__(self, settings: DeliverySettings, method: DeliveryMethod | str | None = None):
        self._settings = settings
        self._method = DeliveryMethod.PICKUP
        self._fee = 0
        self._neighborhood_id: str | None = None
        self._neighborhood_name: str | None = None
        if method is None:
            available = settings.available_methods()
            if available:
                self.select_method(available[0])
        else:
            self.select_method(method)

    @property
    def method(self) -> DeliveryMethod:
        return self._method

    @property
    def neighborhood_id(self) -> str | None:
        return self._neighborhood_id

    @property
    def state(self) -> QuoteState:
        if self._method is DeliveryMethod.PICKUP:
            return QuoteState.PICKUP
        if self._method is DeliveryMethod.FIXED_RATE:
            return QuoteState.FIXED_RATE
        if self._neighborhood_id is None:
            return QuoteState.NEIGHBORHOOD_PENDING
        return QuoteState.NEIGHBORHOOD_RESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.state is not QuoteState.NEIGHBORHOOD_PENDING

    def select_method(self, method: DeliveryMethod | str) -> QuoteState:
        method = DeliveryMethod.normalize(method)
        if method not in self._settings.available_methods():
            raise DeliveryMethodUnavailable(method.value)

        self._method = method
        self._neighborhood_id = None
        self._neighborhood_name = None
        if method is DeliveryMethod.FIXED_RATE:
            self._fee = self._settings.fixed_rate.fee
        else:
            self._fee = 0
        return self.state

    def select_neighborhood(self, neighborhood_id: str) -> QuoteState:
        """Resolve the fee for a neighborhood; the state is unchanged on failure."""
        if self._method is not DeliveryMethod.NEIGHBORHOOD:
            raise DeliveryMethodUnavailable(
                self._method.value,
                "Neighborhood can only be chosen for neighborhood delivery",
            )
        neighborhood = self._settings.find_neighborhood(neighborhood_id)
        if neighborhood is None:
            raise UnknownNeighborhood(neighborhood_id)

        self._neighborhood_id = neighborhood.id
        self._neighborhood_name = neighborhood.name
        self._fee = neighborhood.fee
        return self.state

    def current_fee(self) -> int:
        if self.state in (QuoteState.PICKUP, QuoteState.NEIGHBORHOOD_PENDING):
            return 0
        return self._fee

    def label(self) -> str:
        if self._method is DeliveryMethod.PICKUP:
            return PICKUP_LABEL
        if self._method is DeliveryMethod.FIXED_RATE:
            return self._settings.fixed_rate.description or FIXED_RATE_LABEL
        return f"Entrega para {self._neighborhood_name or NEIGHBORHOOD_PENDING_LABEL}"

    def snapshot(self) -> DeliveryOption:
        return DeliveryOption(
            type=self._method,
            name=self.label(),
            fee=self.current_fee(),
            neighborhood_id=self._neighborhood_id,
            neighborhood_name=self._neighborhood_name,
        )
