"""
Key-value storages for persisting the cart snapshot.
"""

import asyncio
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Protocol
from urllib.parse import quote

from ..config.models import CartConfig

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String-keyed async storage of text values."""
    
    async def get_item(self, key: str) -> Optional[str]:
        ...
    
    async def set_item(self, key: str, value: str) -> None:
        ...
    
    async def remove_item(self, key: str) -> None:
        ...
    
    async def quarantine_item(self, key: str) -> None:
        """Set aside a value that turned out to be corrupted."""
        ...


class MemoryStorage:
    """Storage that keeps values in a dictionary for the process lifetime."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
    
    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)
    
    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
    
    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
    
    async def quarantine_item(self, key: str) -> None:
        # No backups to fall back to, so the value is simply dropped
        self._items.pop(key, None)
    
    def snapshot(self) -> Dict[str, str]:
        """Get a copy of every stored value."""
        return dict(self._items)


class FileStorage:
    """Stores each key in its own file with atomic writes and a backup copy."""
    
    FILE_SUFFIX = ".json"
    BACKUP_SUFFIX = ".backup"
    
    def __init__(self, storage_dir: Optional[str] = None, keep_backup: bool = True):
        """
        Initialize file storage with specified directory.
        
        Args:
            storage_dir: Directory for stored values. If None, uses default location.
            keep_backup: Copy the previous value aside before overwriting it
        """
        if storage_dir is None:
            storage_dir = os.path.join(os.path.expanduser("~"), ".go_marketplace", "storage")
        
        self._storage_dir = Path(storage_dir)
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        self._keep_backup = keep_backup
        
        logger.debug(f"FileStorage initialized with directory: {self._storage_dir}")
    
    def get_file_path(self, key: str) -> Path:
        """Get the path of the file holding a key (percent-encoded, so distinct keys never share a file)."""
        return self._storage_dir / (quote(key, safe="") + self.FILE_SUFFIX)
    
    def get_backup_file_path(self, key: str) -> Path:
        """Get the path of the backup file for a key."""
        path = self.get_file_path(key)
        return path.with_name(path.name + self.BACKUP_SUFFIX)
    
    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)
    
    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)
    
    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)
    
    async def quarantine_item(self, key: str) -> None:
        """Move the main file aside so reads fall back to the backup and writes do not back it up."""
        await asyncio.to_thread(self._handle_corrupted_file, key)
    
    def _read(self, key: str) -> Optional[str]:
        file_path = self.get_file_path(key)
        backup_path = self.get_backup_file_path(key)
        
        value = self._read_file(file_path)
        
        if value is None and backup_path.exists():
            logger.warning(f"Value for {key!r} missing or unreadable, attempting to load from backup")
            value = self._read_file(backup_path)
            
            if value is not None:
                logger.info(f"Recovered value for {key!r} from backup file")
        
        return value
    
    def _read_file(self, file_path: Path) -> Optional[str]:
        if not file_path.exists():
            logger.debug(f"Storage file does not exist: {file_path}")
            return None
        
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read storage file {file_path}: {e}")
            return None
    
    def _write(self, key: str, value: str) -> None:
        file_path = self.get_file_path(key)
        
        # Create backup of existing file if it exists
        if self._keep_backup and file_path.exists():
            shutil.copy2(file_path, self.get_backup_file_path(key))
            logger.debug(f"Created backup of {file_path}")
        
        # Write new value to temporary file first
        temp_file = file_path.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            f.write(value)
        
        # Atomically replace the stored file
        temp_file.replace(file_path)
        logger.debug(f"Wrote {len(value)} characters to {file_path}")
    
    def _remove(self, key: str) -> None:
        for path in (self.get_file_path(key), self.get_backup_file_path(key)):
            path.unlink(missing_ok=True)
        logger.debug(f"Removed stored value for {key!r}")
    
    def _handle_corrupted_file(self, key: str) -> None:
        file_path = self.get_file_path(key)
        
        if not file_path.exists():
            return
        
        corrupted_backup = file_path.with_name(
            f"{file_path.name}.corrupted.{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"
        )
        shutil.move(file_path, corrupted_backup)
        logger.warning(f"Moved corrupted storage file to {corrupted_backup}")


def create_storage(config: CartConfig) -> KeyValueStorage:
    """
    Build the storage selected by configuration.
    
    Args:
        config: Cart configuration
        
    Returns:
        A key-value storage instance
    """
    if config.storage_backend == "memory":
        return MemoryStorage()
    return FileStorage(storage_dir=config.storage_dir, keep_backup=config.keep_backup)
