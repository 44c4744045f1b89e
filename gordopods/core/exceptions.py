"""Custom exceptions for the Gordopods storefront."""
from __future__ import annotations


class GordopodsException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationException(GordopodsException):
    """Input validation errors."""

    pass


class ConfigurationException(GordopodsException):
    """Configuration errors."""

    pass


class InvalidAmount(ValidationException):
    """Amount is not a finite number."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid amount: {value!r}")
        self.value = value


# Variation pricing


class MissingRequiredGroup(ValidationException):
    """A required variation group has no selected option."""

    def __init__(self, group_id: str) -> None:
        super().__init__(f"Variation group {group_id} requires a selection")
        self.group_id = group_id


class InvalidSelectionCardinality(ValidationException):
    """More than one option selected in a single-selection group."""

    def __init__(self, group_id: str, count: int) -> None:
        super().__init__(f"Variation group {group_id} accepts one option, got {count}")
        self.group_id = group_id
        self.count = count


class UnknownVariationOption(ValidationException):
    """Selection references a group or option the product does not have."""

    def __init__(self, group_id: str, option_id: str | None = None) -> None:
        if option_id is None:
            message = f"Variation group {group_id} not found"
        else:
            message = f"Option {option_id} not found in variation group {group_id}"
        super().__init__(message)
        self.group_id = group_id
        self.option_id = option_id


# Cart


class CartException(ValidationException):
    """Cart mutation errors."""

    pass


class InvalidQuantity(CartException):
    """Quantity must be a positive integer."""

    def __init__(self, quantity: object) -> None:
        super().__init__(f"Invalid quantity: {quantity!r}")
        self.quantity = quantity


class InsufficientStock(CartException):
    """Requested quantity exceeds the product's stock."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Product {product_id}: requested {requested}, only {available} available"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


# Delivery


class DeliveryException(ValidationException):
    """Delivery selection errors."""

    pass


class UnknownNeighborhood(DeliveryException):
    """Neighborhood is not in the delivery configuration."""

    def __init__(self, neighborhood_id: str) -> None:
        super().__init__(f"Neighborhood {neighborhood_id} not found")
        self.neighborhood_id = neighborhood_id


class DeliveryMethodUnavailable(DeliveryException):
    """Delivery method is disabled or cannot be used in the current state."""

    def __init__(self, method: str, reason: str | None = None) -> None:
        super().__init__(reason or f"Delivery method {method} is not available")
        self.method = method


# Checkout


class OrderValidationError(ValidationException):
    """Checkout data rejected before an order is created."""

    pass


class EmptyCart(OrderValidationError):
    def __init__(self) -> None:
        super().__init__("Cart is empty")


class MissingCustomerInfo(OrderValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Missing customer info: {', '.join(fields)}")
        self.fields = fields


class IncompleteAddress(OrderValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Incomplete delivery address: {', '.join(fields)}")
        self.fields = fields


class UnresolvedDelivery(OrderValidationError):
    def __init__(self) -> None:
        super().__init__("Delivery neighborhood has not been selected")


# Orders


class InvalidOrderTransition(GordopodsException):
    """Order status change rejected by the lifecycle rules."""

    def __init__(self, order_id: str, reason: str) -> None:
        super().__init__(reason)
        self.order_id = order_id


class OrderNotFound(GordopodsException):
    """Order not found in storage."""

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order with ID {order_id} not found")
        self.order_id = order_id


class PersistenceError(GordopodsException):
    """Storage collaborator failed."""

    pass
