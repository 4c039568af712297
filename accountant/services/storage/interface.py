"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for storage.
This allows us to:
1. Keep the transaction collection in a local file today
2. Use in-memory storage for testing
3. Swap in another small-blob store later without touching the store

The interface is intentionally tiny. Values are opaque bytes; encoding
and decoding belong to the persistence adapter, not to the blob store.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStoreInterface(ABC):
    """
    Abstract interface for small-blob key-value storage.

    Any storage implementation (local files, application settings, etc.)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored bytes, or None if the key is absent

        Raises:
            StorageError: If the value exists but cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Store a value under a key, overwriting any previous value.

        Args:
            key: The storage key
            value: The bytes to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: The storage key

        Returns:
            True if the key existed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceError(StorageError):
    """The transaction collection could not be saved."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but could not be decoded."""
    pass
