"""
Scoped access point for the cart store.
"""

import logging
from contextvars import ContextVar, Token
from typing import Optional

from ..config.models import CartConfig
from ..errors import CartInitializationError
from ..persistence import KeyValueStorage, create_storage
from .store import CartStore

logger = logging.getLogger(__name__)

_active_cart: ContextVar[Optional[CartStore]] = ContextVar("active_cart", default=None)


class CartProvider:
    """
    Owns one started CartStore for the duration of an ``async with`` block.
    
    Inside the block, use_cart() returns the store; the store is flushed and
    closed when the block exits.
    
    Usage:
        async with CartProvider(config=config) as cart:
            cart.add_to_cart(item)
    """
    
    def __init__(self, config: Optional[CartConfig] = None, storage: Optional[KeyValueStorage] = None):
        """
        Args:
            config: Cart configuration. If None, uses defaults.
            storage: Storage to use instead of the one the configuration selects
        """
        self._config = config or CartConfig()
        self._storage = storage
        self._store: Optional[CartStore] = None
        self._token: Optional[Token] = None
    
    @property
    def store(self) -> Optional[CartStore]:
        return self._store
    
    async def __aenter__(self) -> CartStore:
        storage = self._storage
        if storage is None:
            storage = create_storage(self._config)
        
        self._store = CartStore(storage, self._config.storage_key)
        await self._store.start()
        self._token = _active_cart.set(self._store)
        logger.debug("CartProvider entered")
        return self._store
    
    async def __aexit__(self, exc_type, exc, tb) -> None:
        _active_cart.reset(self._token)
        self._token = None
        try:
            await self._store.close()
        finally:
            self._store = None
            logger.debug("CartProvider exited")


def use_cart() -> CartStore:
    """
    Get the store of the enclosing CartProvider.
    
    Raises:
        CartInitializationError: If called outside a CartProvider
    """
    store = _active_cart.get()
    
    if store is None:
        raise CartInitializationError("use_cart must be used within a CartProvider")
    
    return store
