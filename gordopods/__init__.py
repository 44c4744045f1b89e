"""Gordopods storefront: cart pricing, delivery quoting and order checkout."""

__version__ = "0.1.0"
