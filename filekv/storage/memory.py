"""
In-Memory Storage

Dict-backed StorageAdapter with the same contract as FileStorage. Used by
the tests and by anyone embedding the dispatcher without a filesystem.
"""

from typing import Dict, List, Optional

from .base import StorageAdapter


class MemoryStorage(StorageAdapter):
    """Key-value storage held in a plain dict."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._store: Dict[str, bytes] = dict(initial or {})

    def write(self, key: str, data: bytes) -> None:
        self._store[key] = bytes(data)

    def read(self, key: str, limit: Optional[int] = None) -> Optional[bytes]:
        value = self._store.get(key)
        if value is None or limit is None:
            return value
        return value[:limit]

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    def keys(self) -> List[str]:
        """Return the stored keys in insertion order."""
        return list(self._store)

    def size(self) -> int:
        """Get the current number of keys in the store."""
        return len(self._store)

    def clear(self) -> None:
        """Remove all keys from the store."""
        self._store.clear()
