"""
Cart state module.

This module holds the cart store, the pure list operations behind its
mutations, and the provider that scopes access to a running store.
"""

from .provider import CartProvider, use_cart
from .store import CartStore

__all__ = ['CartStore', 'CartProvider', 'use_cart']
