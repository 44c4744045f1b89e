"""Helpers for minor-unit money amounts, parsing and display formatting."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from gordopods.core.exceptions import InvalidAmount

CENT = Decimal("0.01")

# locale -> (currency symbol, thousands separator, decimal separator)
LOCALE_FORMATS: dict[str, tuple[str, str, str]] = {
    "pt_BR": ("R$", ".", ","),
    "en_US": ("$", ",", "."),
}
DEFAULT_LOCALE = "pt_BR"


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmount(value) from exc
    if not result.is_finite():
        raise InvalidAmount(value)
    return result


def to_minor_units(value: Any) -> int:
    """Convert a decimal amount (``49.9``, ``"49.90"``) to integer cents."""
    amount = _to_decimal(value)
    cents = (amount / CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def _whole_minor_units(value: Any) -> int:
    amount = _to_decimal(value)
    if amount != amount.to_integral_value():
        raise InvalidAmount(value)
    return int(amount)


def from_minor_units(minor_units: int) -> Decimal:
    return (Decimal(_whole_minor_units(minor_units)) * CENT).quantize(CENT)


def _group_thousands(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_money(minor_units: int, locale: str = DEFAULT_LOCALE) -> str:
    """Format cents for display, e.g. ``10980`` -> ``"R$ 109,80"``."""
    symbol, thousands, decimal_sep = LOCALE_FORMATS.get(locale, LOCALE_FORMATS[DEFAULT_LOCALE])
    value = _whole_minor_units(minor_units)
    sign = "-" if value < 0 else ""
    whole, cents = divmod(abs(value), 100)
    return f"{sign}{symbol} {_group_thousands(str(whole), thousands)}{decimal_sep}{cents:02d}"


def parse_money(text: str) -> int:
    """Parse admin input such as ``"49,90"`` or ``"R$ 1.234,56"`` into cents."""
    if text is None:
        raise InvalidAmount(text)
    cleaned = str(text).replace("R$", "").replace("\xa0", "").replace(" ", "").strip()
    if not cleaned:
        raise InvalidAmount(text)
    if "," in cleaned:
        # pt-BR: dots group thousands, comma separates cents
        cleaned = cleaned.replace(".", "").replace(",", ".")
    return to_minor_units(cleaned)


def format_phone(phone: str) -> str:
    """Format Brazilian phone numbers: ``(11) 98765-4321`` / ``(11) 8765-4321``."""
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone


def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value or "")
