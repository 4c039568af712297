"""
Transaction Persistence Adapter

Stores the whole transaction collection as one JSON array under a single
fixed key of a blob store.

DESIGN DECISION: Loading never fails. Missing data and undecodable data
both come back as an empty collection so the app always starts, but the
two cases are reported separately through LoadResult so a corrupt file
is visible instead of silently looking like a fresh install.

Saving, on the other hand, always reports failure. A mutation that could
not be written is an error, never a silent drop.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from accountant.logger import get_logger
from accountant.models.transaction import Transaction
from accountant.services.storage.interface import (
    BlobStoreInterface,
    CorruptDataError,
    PersistenceError,
    StorageError,
)


DEFAULT_TRANSACTIONS_KEY = "SavedTransactions"

_COLLECTION = TypeAdapter(list[Transaction])

logger = get_logger(__name__)


class LoadStatus(str, Enum):
    """Outcome of reading the persisted collection."""
    LOADED = "loaded"    # Key present and decoded
    EMPTY = "empty"      # Key absent
    CORRUPT = "corrupt"  # Key present but undecodable


class LoadResult(BaseModel):
    """Collection read from storage plus how it was obtained."""

    transactions: list[Transaction] = Field(default_factory=list)
    status: LoadStatus = LoadStatus.EMPTY
    error: Optional[str] = None

    @property
    def is_corrupt(self) -> bool:
        return self.status == LoadStatus.CORRUPT


class TransactionPersistence:
    """
    Encodes and decodes the transaction collection.

    The full collection is rewritten on every save.
    """

    def __init__(
        self,
        blob_store: BlobStoreInterface,
        key: str = DEFAULT_TRANSACTIONS_KEY,
    ):
        self._blob_store = blob_store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @staticmethod
    def encode(transactions: Iterable[Transaction]) -> bytes:
        """Serialize a collection to the persisted JSON form."""
        return _COLLECTION.dump_json(list(transactions))

    @staticmethod
    def decode(data: bytes) -> list[Transaction]:
        """
        Parse the persisted JSON form.

        Raises:
            CorruptDataError: If the bytes are not a valid collection
        """
        try:
            return _COLLECTION.validate_json(data)
        except ValidationError as e:
            raise CorruptDataError(
                f"Stored transactions could not be decoded ({e.error_count()} errors)"
            ) from e

    def save(self, transactions: Iterable[Transaction]) -> None:
        """
        Overwrite the persisted collection.

        Raises:
            PersistenceError: If encoding or writing fails
        """
        transactions = list(transactions)
        try:
            data = self.encode(transactions)
        except (ValueError, TypeError) as e:
            logger.error("transactions_encode_failed", key=self._key, error=str(e))
            raise PersistenceError(f"Failed to encode transactions: {e}") from e

        try:
            self._blob_store.set(self._key, data)
        except StorageError as e:
            logger.error("transactions_save_failed", key=self._key, error=str(e))
            raise PersistenceError(f"Failed to save transactions: {e}") from e

        logger.debug("transactions_saved", key=self._key, count=len(transactions))

    def load_result(self) -> LoadResult:
        """Read the persisted collection and report how it went."""
        try:
            data = self._blob_store.get(self._key)
        except StorageError as e:
            logger.warning("transactions_unreadable", key=self._key, error=str(e))
            return LoadResult(status=LoadStatus.CORRUPT, error=str(e))

        if data is None:
            return LoadResult(status=LoadStatus.EMPTY)

        try:
            transactions = self.decode(data)
        except CorruptDataError as e:
            logger.warning("transactions_corrupt", key=self._key, error=str(e))
            return LoadResult(status=LoadStatus.CORRUPT, error=str(e))

        logger.debug("transactions_loaded", key=self._key, count=len(transactions))
        return LoadResult(transactions=transactions, status=LoadStatus.LOADED)

    def load(self) -> list[Transaction]:
        """Read the persisted collection; empty if absent or undecodable."""
        return self.load_result().transactions
