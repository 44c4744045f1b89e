"""Customer contact data collected at checkout."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    street: str = ""
    number: str = ""
    complement: str = ""
    district: str = ""

    def missing_fields(self) -> list[str]:
        """Names of the mandatory fields left blank."""
        return [
            name
            for name in ("street", "number", "district")
            if not str(getattr(self, name) or "").strip()
        ]

    def is_complete(self) -> bool:
        return not self.missing_fields()


class Customer(BaseModel):
    """Frozen so an assembled order cannot be edited through its customer."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone: str = ""
    address: Optional[Address] = None

    def missing_fields(self) -> list[str]:
        return [name for name in ("name", "phone") if not str(getattr(self, name) or "").strip()]
