"""Storage module for filekv."""

from .base import StorageAdapter
from .filesystem import FileStorage
from .memory import MemoryStorage

__all__ = ["StorageAdapter", "FileStorage", "MemoryStorage"]
