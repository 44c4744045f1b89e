from __future__ import annotations

import pytest

from gordopods.core.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    MissingRequiredGroup,
    ValidationException,
)
from gordopods.domain.cart import CartLedger
from gordopods.domain.pricing import OptionSelection


def _assert_consistent(cart: CartLedger) -> None:
    for item in cart:
        modifiers = sum(v.price_modifier for v in item.selected_variations)
        assert item.total_price == max(0, item.base_price + modifiers) * item.quantity
    assert cart.subtotal == sum(item.total_price for item in cart)


def test_line_total_with_modifier(product) -> None:
    cart = CartLedger()
    item = cart.add_item(product, 2, [OptionSelection("size", "M")])

    assert item.unit_price == 5490
    assert item.total_price == 10980
    assert cart.subtotal == 10980


def test_same_selection_merges_into_one_line(product) -> None:
    cart = CartLedger()
    cart.add_item(product, 1, [OptionSelection("size", "M")])
    cart.add_item(product, 2, [("size", "M")])

    assert len(cart) == 1
    assert cart.items[0].quantity == 3
    assert cart.subtotal == 3 * 5490


def test_selection_order_does_not_affect_merge(product) -> None:
    cart = CartLedger()
    cart.add_item(product, 1, [("size", "M"), ("extras", "case"), ("extras", "strap")])
    cart.add_item(product, 1, [("extras", "strap"), ("size", "M"), ("extras", "case")])

    assert len(cart) == 1
    assert cart.items[0].quantity == 2


def test_different_selection_creates_new_line(product) -> None:
    cart = CartLedger()
    first = cart.add_item(product, 1, [("size", "M")])
    second = cart.add_item(product, 1, [("size", "G")])

    assert len(cart) == 2
    assert first.id != second.id
    _assert_consistent(cart)


def test_new_line_snapshots_main_image(product) -> None:
    item = CartLedger().add_item(product, 1, [("size", "P")])
    assert item.image_url == "https://cdn.example/p1-b.jpg"


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
def test_add_item_rejects_invalid_quantity(product, quantity) -> None:
    cart = CartLedger()
    with pytest.raises(InvalidQuantity):
        cart.add_item(product, quantity, [("size", "M")])
    assert cart.is_empty()


def test_add_item_requires_required_groups(product) -> None:
    with pytest.raises(MissingRequiredGroup):
        CartLedger().add_item(product, 1, [("extras", "case")])


def test_add_item_rejects_inactive_product(plain_product) -> None:
    plain_product.active = False
    with pytest.raises(ValidationException):
        CartLedger().add_item(plain_product)


def test_negative_combination_clamps_to_zero(product) -> None:
    cart = CartLedger()
    item = cart.add_item(product, 2, [("size", "P"), ("extras", "promo")])
    assert item.total_price == 0
    assert cart.subtotal == 0


def test_set_quantity_uses_frozen_price(product) -> None:
    cart = CartLedger()
    item = cart.add_item(product, 1, [("size", "M")])
    product.price = 9990

    assert cart.set_quantity(item.id, 4)
    assert cart.items[0].total_price == 4 * 5490
    _assert_consistent(cart)


def test_set_quantity_below_one_removes(product, plain_product) -> None:
    cart = CartLedger()
    item = cart.add_item(product, 1, [("size", "M")])
    cart.add_item(plain_product, 2)

    assert cart.set_quantity(item.id, 0)
    assert len(cart) == 1
    assert cart.subtotal == 2500


def test_set_quantity_unknown_item_is_noop(plain_product) -> None:
    cart = CartLedger()
    cart.add_item(plain_product, 1)
    assert not cart.set_quantity("missing", 3)
    assert cart.subtotal == 1250


def test_remove_missing_item_leaves_cart_unchanged(plain_product) -> None:
    cart = CartLedger()
    cart.add_item(plain_product, 2)
    before = cart.to_dict()

    assert cart.remove_item("does-not-exist") is False
    assert cart.to_dict() == before


def test_clear_resets_subtotal(product, plain_product) -> None:
    cart = CartLedger()
    cart.add_item(product, 1, [("size", "G")])
    cart.add_item(plain_product, 3)
    cart.clear()

    assert cart.is_empty()
    assert cart.subtotal == 0
    assert cart.item_count == 0


def test_subtotal_invariant_across_mutations(product, plain_product) -> None:
    cart = CartLedger()
    a = cart.add_item(product, 1, [("size", "M"), ("extras", "case")])
    _assert_consistent(cart)
    cart.add_item(plain_product, 2)
    _assert_consistent(cart)
    cart.set_quantity(a.id, 5)
    _assert_consistent(cart)
    cart.remove_item(a.id)
    _assert_consistent(cart)
    assert cart.subtotal == 2500
    assert cart.item_count == 2


def test_stock_control_limits_quantity(plain_product) -> None:
    plain_product.stock_control = True
    plain_product.stock_quantity = 3
    cart = CartLedger()
    item = cart.add_item(plain_product, 2)

    with pytest.raises(InsufficientStock) as exc_info:
        cart.add_item(plain_product, 2)
    assert exc_info.value.requested == 4
    assert cart.items[0].quantity == 2

    with pytest.raises(InsufficientStock):
        cart.set_quantity(item.id, 4)
    assert cart.set_quantity(item.id, 3)


def test_from_dict_recomputes_totals(product) -> None:
    cart = CartLedger()
    cart.add_item(product, 2, [("size", "M")])
    payload = cart.to_dict()
    payload["subtotal"] = 1
    payload["items"][0]["total_price"] = 1

    restored = CartLedger.from_dict(payload)

    assert restored.subtotal == 10980
    assert restored.items[0].id == cart.items[0].id
    assert restored.items[0].selection_key == cart.items[0].selection_key


def test_from_dict_handles_missing_payload() -> None:
    assert CartLedger.from_dict(None).is_empty()
    assert CartLedger.from_dict({"items": "nope"}).is_empty()
