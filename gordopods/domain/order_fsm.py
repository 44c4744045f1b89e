"""Order lifecycle: which status changes an admin may apply."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from gordopods.domain.value_objects import OrderStatus


ALLOWED_TRANSITIONS: Mapping[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NEW: frozenset(
        {
            OrderStatus.PROCESSING,
            OrderStatus.CANCELLED,
        }
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    {
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)


@dataclass(frozen=True, slots=True)
class TransitionValidationResult:
    allowed: bool
    reason: str | None = None


def _parse(status: OrderStatus | str | None) -> OrderStatus | None:
    try:
        return OrderStatus.normalize(status)
    except ValueError:
        return None


def validate_order_transition(
    *,
    current_status: OrderStatus | str,
    target_status: OrderStatus | str | None,
) -> TransitionValidationResult:
    """Validate terminal guards and the transition matrix."""
    if not target_status:
        return TransitionValidationResult(False, "Novo status não informado.")

    target = _parse(target_status)
    if target is None:
        return TransitionValidationResult(False, f"Status não suportado: {target_status}")

    current = _parse(current_status)
    if current is None:
        return TransitionValidationResult(False, f"Status atual não suportado: {current_status}")

    if current == target:
        return TransitionValidationResult(True)

    if current in TERMINAL_STATUSES:
        return TransitionValidationResult(
            False,
            f"Não é possível alterar o status final '{current.value}'.",
        )

    if target not in ALLOWED_TRANSITIONS[current]:
        return TransitionValidationResult(
            False,
            f"Transição '{current.value} -> {target.value}' não permitida.",
        )

    return TransitionValidationResult(True)
