from __future__ import annotations

from decimal import Decimal

import pytest

from gordopods.core.exceptions import InvalidAmount
from gordopods.core.money import (
    format_money,
    format_phone,
    from_minor_units,
    parse_money,
    to_minor_units,
)


def test_to_minor_units_accepts_decimal_str_and_float() -> None:
    assert to_minor_units(Decimal("49.90")) == 4990
    assert to_minor_units("109.8") == 10980
    assert to_minor_units(0.1) == 10
    assert to_minor_units(5) == 500


def test_to_minor_units_rounds_half_up() -> None:
    assert to_minor_units("0.005") == 1
    assert to_minor_units("-1.255") == -126


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "-Infinity", "abc", True])
def test_to_minor_units_rejects_non_finite(value) -> None:
    with pytest.raises(InvalidAmount):
        to_minor_units(value)


def test_unparseable_amount_keeps_the_cause() -> None:
    with pytest.raises(InvalidAmount) as exc_info:
        to_minor_units("abc")
    assert exc_info.value.__cause__ is not None


def test_format_money_brl() -> None:
    assert format_money(10980) == "R$ 109,80"
    assert format_money(0) == "R$ 0,00"
    assert format_money(5) == "R$ 0,05"
    assert format_money(123456789) == "R$ 1.234.567,89"
    assert format_money(-250) == "-R$ 2,50"


def test_format_money_other_locale() -> None:
    assert format_money(123456, "en_US") == "$ 1,234.56"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("-Infinity"), True, 10.5, "abc"])
def test_format_money_rejects_invalid_minor_units(value) -> None:
    with pytest.raises(InvalidAmount):
        format_money(value)


def test_format_money_accepts_integral_decimal() -> None:
    assert format_money(Decimal("1050")) == "R$ 10,50"


def test_parse_money_reads_admin_input() -> None:
    assert parse_money("49,90") == 4990
    assert parse_money("R$ 1.234,56") == 123456
    assert parse_money("12.5") == 1250
    with pytest.raises(InvalidAmount):
        parse_money("  ")


def test_from_minor_units() -> None:
    assert from_minor_units(10980) == Decimal("109.80")
    with pytest.raises(InvalidAmount):
        from_minor_units(float("nan"))
    with pytest.raises(InvalidAmount):
        from_minor_units(1.5)


def test_format_phone() -> None:
    assert format_phone("11987654321") == "(11) 98765-4321"
    assert format_phone("(11) 8765-4321") == "(11) 8765-4321"
    assert format_phone("1234") == "1234"
