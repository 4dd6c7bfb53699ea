"""
Storage Adapter Interface

The dispatcher only ever talks to storage through these three calls.
Keys reaching an adapter have already passed is_valid_key().
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageAdapter(ABC):
    """Capability for storing raw value bytes under a key."""

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """
        Store data under key, replacing any previous content.

        Raises:
            OSError: if the value could not be stored
        """

    @abstractmethod
    def read(self, key: str, limit: Optional[int] = None) -> Optional[bytes]:
        """
        Return the content stored under key, or None if there is none.

        At most ``limit`` bytes are returned when a limit is given.

        Raises:
            OSError: on failures other than absence
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove key.

        Returns:
            True if something was removed, False if key was absent
        """
