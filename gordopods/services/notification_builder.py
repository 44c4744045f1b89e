"""
Notification Builder - WhatsApp order message and deep link.

Builds the text the customer sends to the store. Output depends only on the
order, so the same order always renders the same message.
"""
from __future__ import annotations

from urllib.parse import quote

from gordopods.core.money import DEFAULT_LOCALE, digits_only, format_money
from gordopods.domain.order import Order, OrderItem

WHATSAPP_BASE_URL = "https://wa.me"


class NotificationBuilder:
    """Renders an order into a WhatsApp-formatted summary."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale

    def _money(self, minor_units: int) -> str:
        return format_money(minor_units, self.locale)

    def _header(self, order: Order) -> list[str]:
        return [
            f"*Pedido {order.order_number} - {order.customer.name}*",
            "",
            f"📱 *Cliente*: {order.customer.name}",
            f"📞 *Telefone*: {order.customer.phone}",
        ]

    def _address(self, order: Order) -> list[str]:
        address = order.customer.address
        if order.delivery_option.is_pickup or address is None:
            return []
        lines = ["", "📍 *Endereço*:", f"{address.street}, {address.number}"]
        if address.complement:
            lines.append(f"Complemento: {address.complement}")
        lines.append(f"Bairro: {address.district}")
        return lines

    def _item(self, index: int, item: OrderItem) -> list[str]:
        lines = [f"{index}. {item.quantity}x {item.product_name} - {self._money(item.total_price)}"]
        for variation in item.selected_variations:
            lines.append(f"   • {variation.group_name}: {variation.option_name}")
        return lines

    def build_order_message(self, order: Order) -> str:
        """Render the full order summary."""
        lines = self._header(order)
        lines += self._address(order)

        lines += ["", "🛒 *Itens do pedido*:"]
        for index, item in enumerate(order.items, start=1):
            lines += self._item(index, item)

        lines += [
            "",
            f"💰 *Subtotal*: {self._money(order.subtotal)}",
            f"🚚 *{order.delivery_option.name}*: {self._money(order.delivery_option.fee)}",
            f"💵 *Total*: {self._money(order.total)}",
        ]

        if order.notes:
            lines += ["", "📝 *Observações*:", order.notes]

        return "\n".join(lines) + "\n"


def build_whatsapp_url(phone_number: str, message: str) -> str:
    """wa.me deep link with the message pre-filled."""
    return f"{WHATSAPP_BASE_URL}/{digits_only(phone_number)}?text={quote(message, safe='')}"
