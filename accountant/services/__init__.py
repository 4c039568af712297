"""Services package."""

from accountant.services.storage import (
    BlobStoreInterface,
    CorruptDataError,
    FileBlobStore,
    InMemoryBlobStore,
    LoadResult,
    LoadStatus,
    PersistenceError,
    StorageError,
    TransactionPersistence,
)

__all__ = [
    "BlobStoreInterface",
    "CorruptDataError",
    "FileBlobStore",
    "InMemoryBlobStore",
    "LoadResult",
    "LoadStatus",
    "PersistenceError",
    "StorageError",
    "TransactionPersistence",
]
