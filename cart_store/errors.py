"""
Exception types raised by the cart store.
"""


class CartError(Exception):
    """Base class for cart store errors."""


class CartInitializationError(CartError):
    """Raised when cart state is accessed without an active store."""


class SnapshotError(CartError):
    """Raised when a persisted cart snapshot cannot be decoded."""
