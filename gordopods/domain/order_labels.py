"""Shared status label helpers for the admin orders console."""
from __future__ import annotations

from gordopods.domain.value_objects import OrderStatus

STATUS_LABELS = {
    OrderStatus.NEW: "Novo",
    OrderStatus.PROCESSING: "Em Preparo",
    OrderStatus.SHIPPED: "Enviado",
    OrderStatus.DELIVERED: "Entregue",
    OrderStatus.CANCELLED: "Cancelado",
}

UNKNOWN_STATUS_LABEL = "Desconhecido"


def status_label(status: OrderStatus | str | None) -> str:
    """Return the pt-BR label for an order status."""
    try:
        return STATUS_LABELS[OrderStatus.normalize(status)]
    except ValueError:
        return UNKNOWN_STATUS_LABEL
