"""
Cart state container with queued persistence.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Tuple

from ..config.models import CartConfig, DEFAULT_STORAGE_KEY
from ..errors import CartInitializationError, SnapshotError
from ..models import AddRequest, LineItem
from ..persistence import KeyValueStorage, create_storage, dump_snapshot, load_snapshot
from .operations import add_item, clear_items, decrement_item, increment_item

logger = logging.getLogger(__name__)

Listener = Callable[[List[LineItem]], None]
Operation = Callable[..., List[LineItem]]

# Queued in place of a snapshot when the stored key should be removed
_REMOVE = None


class CartStore:
    """
    Holds the cart line items and mirrors them to key-value storage.
    
    Mutations change the in-memory list immediately and queue a full snapshot
    write. A single writer task drains the queue, coalescing pending snapshots
    down to the newest one, and only starts writing once hydration finished.
    
    Usage:
        store = CartStore(MemoryStorage())
        await store.start()
        store.add_to_cart(AddRequest(id="1", title="A", image_url="u", price=10))
        await store.flush()
        await store.close()
    """
    
    def __init__(self, storage: KeyValueStorage, storage_key: str = DEFAULT_STORAGE_KEY):
        """
        Initialize an empty, not yet started cart store.
        
        Args:
            storage: Key-value storage the cart snapshot is persisted to
            storage_key: Key under which the snapshot is stored
        """
        self._storage = storage
        self._storage_key = storage_key
        self._products: List[LineItem] = []
        self._listeners: List[Listener] = []
        self._pending: List[Tuple[Operation, Tuple[Any, ...]]] = []
        self._hydrated = asyncio.Event()
        self._queue: Optional[asyncio.Queue] = None
        self._writer_task: Optional[asyncio.Task] = None
        self._hydration_task: Optional[asyncio.Task] = None
        self._write_failures = 0
        self._closing = False
    
    @classmethod
    def from_config(cls, config: CartConfig) -> "CartStore":
        """Build a store backed by the configured storage."""
        return cls(create_storage(config), config.storage_key)
    
    @property
    def products(self) -> List[LineItem]:
        """Current line items (copies)."""
        return [product.model_copy() for product in self._products]
    
    @property
    def storage_key(self) -> str:
        return self._storage_key
    
    @property
    def started(self) -> bool:
        return self._queue is not None
    
    @property
    def hydrated(self) -> bool:
        return self._hydrated.is_set()
    
    @property
    def write_failures(self) -> int:
        """Number of snapshot writes that failed since the store was created."""
        return self._write_failures
    
    @property
    def total_quantity(self) -> int:
        return sum(product.quantity for product in self._products)
    
    def find(self, item_id: str) -> Optional[LineItem]:
        """Get a copy of the line item with the given id, if present."""
        for product in self._products:
            if product.id == item_id:
                return product.model_copy()
        return None
    
    async def start(self) -> None:
        """
        Start the writer and kick off hydration without waiting for it.
        
        Calling start on a running store does nothing.
        """
        if self._queue is not None:
            return
        
        self._queue = asyncio.Queue()
        self._closing = False
        self._writer_task = asyncio.create_task(self._run_writer())
        self._hydration_task = asyncio.create_task(self._hydrate())
        logger.debug(f"CartStore started for key {self._storage_key!r}")
    
    async def wait_until_hydrated(self) -> None:
        await self._hydrated.wait()
    
    async def _hydrate(self) -> None:
        """
        Load the persisted snapshot into memory.
        
        Mutations made before hydration finished are replayed on top of the
        loaded items. A corrupted snapshot is set aside and the backup, where
        the storage keeps one, is used instead. When nothing usable is stored
        the cart starts empty.
        """
        if self.hydrated:
            return
        
        loaded, recovered = await self._load_stored_items()
        
        products = loaded
        for operation, args in self._pending:
            products = operation(products, *args)
        replayed = len(self._pending)
        cleared_last = replayed > 0 and self._pending[-1][0] is clear_items
        self._pending.clear()
        
        self._products = products
        self._hydrated.set()
        logger.info(f"Hydrated cart with {len(loaded)} stored item(s)")
        
        if replayed:
            logger.info(f"Replayed {replayed} change(s) made before hydration finished")
        
        if replayed or recovered:
            self._publish()
            self._enqueue(_REMOVE if cleared_last else self._products)
        elif loaded:
            self._publish()
    
    async def _load_stored_items(self) -> Tuple[List[LineItem], bool]:
        text = await self._read_stored_text()
        if not text:
            return [], False
        
        try:
            return load_snapshot(text), False
        except SnapshotError as e:
            logger.warning(f"Ignoring corrupted cart snapshot {self._storage_key!r}: {e}")
        
        try:
            await self._storage.quarantine_item(self._storage_key)
        except Exception as e:
            logger.error(f"Failed to set aside corrupted cart snapshot {self._storage_key!r}: {e}")
            return [], False
        
        # Reads fall back to the backup once the corrupted value is gone
        text = await self._read_stored_text()
        if not text:
            return [], False
        
        try:
            items = load_snapshot(text)
        except SnapshotError as e:
            logger.warning(f"Backup cart snapshot {self._storage_key!r} is corrupted too: {e}")
            return [], False
        
        logger.info(f"Recovered cart snapshot {self._storage_key!r} with {len(items)} item(s) from backup")
        return items, True
    
    async def _read_stored_text(self) -> Optional[str]:
        try:
            return await self._storage.get_item(self._storage_key)
        except Exception as e:
            logger.error(f"Failed to read cart snapshot {self._storage_key!r}: {e}")
            return None
    
    def add_to_cart(self, item: AddRequest) -> None:
        """Add a product, or raise its quantity by one if already in the cart."""
        self._apply(add_item, item)
    
    def increment(self, item_id: str) -> None:
        self._apply(increment_item, item_id)
    
    def decrement(self, item_id: str) -> None:
        """Lower an item's quantity by one, removing it when it reaches zero."""
        self._apply(decrement_item, item_id)
    
    def clear(self) -> None:
        """Empty the cart and remove the stored snapshot."""
        self._apply(clear_items)
    
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the line items after every change.
        
        Args:
            listener: Callable receiving the new list of line items
            
        Returns:
            A function that unregisters the listener
        """
        self._listeners.append(listener)
        
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        
        return unsubscribe
    
    async def flush(self) -> None:
        """Wait until every queued snapshot has been written (or has failed)."""
        if self._queue is None:
            return
        await self._queue.join()
    
    async def close(self) -> None:
        """
        Finish hydration and pending writes, then stop the writer.
        
        Mutations are rejected as soon as closing starts.
        """
        if self._queue is None:
            return
        
        # Reject mutations from here on; the flush below is the last one
        self._closing = True
        
        if self._hydration_task is not None:
            await self._hydration_task
        await self.flush()
        
        self._writer_task.cancel()
        try:
            await self._writer_task
        except asyncio.CancelledError:
            pass
        
        self._queue = None
        self._writer_task = None
        self._hydration_task = None
        logger.debug(f"CartStore closed for key {self._storage_key!r}")
    
    def _apply(self, operation: Operation, *args: Any) -> None:
        if self._queue is None:
            raise CartInitializationError("CartStore must be started before use")
        if self._closing:
            raise CartInitializationError("CartStore is closing")
        
        if not self.hydrated:
            self._pending.append((operation, args))
        
        self._products = operation(self._products, *args)
        self._publish()
        self._enqueue(_REMOVE if operation is clear_items else self._products)
    
    def _publish(self) -> None:
        snapshot = self.products
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Cart listener failed")
    
    def _enqueue(self, products: Optional[List[LineItem]]) -> None:
        self._queue.put_nowait(products)
    
    async def _run_writer(self) -> None:
        await self._hydrated.wait()
        
        while True:
            products = await self._queue.get()
            
            # Only the newest snapshot matters
            while not self._queue.empty():
                self._queue.task_done()
                products = self._queue.get_nowait()
            
            try:
                await self._persist(products)
            except Exception as e:
                self._write_failures += 1
                logger.error(f"Failed to persist cart snapshot {self._storage_key!r}: {e}")
            finally:
                self._queue.task_done()
    
    async def _persist(self, products: Optional[List[LineItem]]) -> None:
        if products is _REMOVE:
            await self._storage.remove_item(self._storage_key)
            logger.info(f"Removed cart snapshot {self._storage_key!r}")
            return
        
        await self._storage.set_item(self._storage_key, dump_snapshot(products))
        logger.info(f"Persisted cart snapshot with {len(products)} item(s)")
