"""
Storage Services Package

Provides the abstract blob store interface, a local-file and an in-memory
implementation, and the adapter that persists the transaction collection.
"""

from accountant.services.storage.interface import (
    BlobStoreInterface,
    CorruptDataError,
    PersistenceError,
    StorageError,
)
from accountant.services.storage.file_store import FileBlobStore
from accountant.services.storage.memory import InMemoryBlobStore
from accountant.services.storage.persistence import (
    DEFAULT_TRANSACTIONS_KEY,
    LoadResult,
    LoadStatus,
    TransactionPersistence,
)

__all__ = [
    # Interfaces
    "BlobStoreInterface",
    # Exceptions
    "CorruptDataError",
    "PersistenceError",
    "StorageError",
    # Implementations
    "FileBlobStore",
    "InMemoryBlobStore",
    # Transaction persistence
    "DEFAULT_TRANSACTIONS_KEY",
    "LoadResult",
    "LoadStatus",
    "TransactionPersistence",
]
