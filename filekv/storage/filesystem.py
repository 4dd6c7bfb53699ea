"""
Filesystem Storage

One file per key, holding the raw value bytes with no metadata. Each key
names a file directly inside the data directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .base import StorageAdapter

logger = logging.getLogger(__name__)


class FileStorage(StorageAdapter):
    """
    Store each key as a file in a single directory.

    Attributes:
        root: Directory holding one file per key
    """

    def __init__(self, root: Union[str, Path] = "."):
        """
        Initialize the storage, creating the data directory if needed.

        Raises:
            OSError: if the directory cannot be created
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / key

    def write(self, key: str, data: bytes) -> None:
        with open(self._path(key), "wb") as fp:
            fp.write(data)
        logger.debug(f"Wrote {len(data)} bytes to {key!r}")

    def read(self, key: str, limit: Optional[int] = None) -> Optional[bytes]:
        try:
            with open(self._path(key), "rb") as fp:
                return fp.read(limit)
        except FileNotFoundError:
            return None

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def __repr__(self) -> str:
        return f"FileStorage(root={str(self.root)!r})"
