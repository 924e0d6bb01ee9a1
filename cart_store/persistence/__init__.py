"""
Data persistence module for the cart store.

This module provides the key-value storages the cart snapshot is written to,
the snapshot codec, and a factory that picks a storage from configuration.
"""

from .snapshot import dump_snapshot, load_snapshot
from .storage import KeyValueStorage, MemoryStorage, FileStorage, create_storage

__all__ = [
    'KeyValueStorage',
    'MemoryStorage',
    'FileStorage',
    'create_storage',
    'dump_snapshot',
    'load_snapshot',
]
