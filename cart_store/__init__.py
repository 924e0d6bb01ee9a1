"""
Cart Store - a persistent shopping-cart state container.

This package keeps an in-memory list of cart line items, mirrors it to a
local key-value storage after every change, and exposes add, increment and
decrement operations through a provider-scoped access point.
"""

__version__ = "0.1.0"
__author__ = "Cart Store Team"

# Lazy imports to avoid dependency issues during package setup
__all__ = [
    "CartConfig",
    "ConfigurationManager",
    "CartStore",
    "CartProvider",
    "use_cart",
    "LineItem",
    "AddRequest",
    "CartInitializationError",
]

def __getattr__(name):
    """Lazy import for package components."""
    if name == "CartConfig":
        from .config import CartConfig
        return CartConfig
    elif name == "ConfigurationManager":
        from .config import ConfigurationManager
        return ConfigurationManager
    elif name == "CartStore":
        from .cart import CartStore
        return CartStore
    elif name == "CartProvider":
        from .cart import CartProvider
        return CartProvider
    elif name == "use_cart":
        from .cart import use_cart
        return use_cart
    elif name == "LineItem":
        from .models import LineItem
        return LineItem
    elif name == "AddRequest":
        from .models import AddRequest
        return AddRequest
    elif name == "CartInitializationError":
        from .errors import CartInitializationError
        return CartInitializationError
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
