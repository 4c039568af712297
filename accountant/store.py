"""
Transaction Store

The store is the single owner of the transaction collection:
1. All mutation goes through it
2. Every mutation is persisted before the call returns
3. Every derived figure (totals, daily totals, category breakdowns)
   is recomputed from current state on each read

DESIGN DECISION: Update and delete of an unknown id do nothing and
return False instead of raising. The collection and the persisted blob
are left untouched, and callers that care can check the result.

DESIGN DECISION: A failed save is raised as PersistenceError and the
in-memory collection is rolled back, so memory never runs ahead of disk.
"""

import threading
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence
from uuid import UUID

from accountant.config import get_settings
from accountant.logger import get_logger
from accountant.models.events import StoreChange
from accountant.models.transaction import (
    CategorySummary,
    Transaction,
    TransactionType,
)
from accountant.services.storage import (
    FileBlobStore,
    LoadStatus,
    PersistenceError,
    TransactionPersistence,
)


Listener = Callable[[StoreChange], None]

logger = get_logger(__name__)


def sort_by_date_desc(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest first; equal dates keep their incoming order."""
    return sorted(transactions, key=lambda t: t.local_date, reverse=True)


class TransactionStore:
    """
    In-memory transaction collection backed by a persistence adapter.

    The collection is kept in insertion order. Read views that are shown
    to users (`sorted_transactions`, `recent`) are sorted by date, newest
    first.
    """

    def __init__(
        self,
        persistence: TransactionPersistence,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the store and load the persisted collection.

        Args:
            persistence: Adapter used to load and save the collection
            today: Clock for "today" aggregates (injectable for tests)
        """
        self._persistence = persistence
        self._today = today
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

        result = persistence.load_result()
        self._transactions: list[Transaction] = result.transactions
        self._load_status = result.status

        if result.is_corrupt:
            logger.warning(
                "store_started_from_corrupt_data",
                key=persistence.key,
                error=result.error,
            )
        else:
            logger.info(
                "store_loaded",
                status=result.status.value,
                count=len(self._transactions),
            )

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def load_status(self) -> LoadStatus:
        """How the collection was obtained at startup."""
        return self._load_status

    @property
    def transactions(self) -> list[Transaction]:
        """Copy of the collection in insertion order."""
        with self._lock:
            return list(self._transactions)

    def sorted_transactions(self) -> list[Transaction]:
        """The collection sorted by date, newest first."""
        with self._lock:
            return sort_by_date_desc(self._transactions)

    def recent(self, limit: Optional[int] = None) -> list[Transaction]:
        """The newest `limit` transactions (default from settings)."""
        if limit is None:
            limit = get_settings().app.recent_transactions_limit
        return self.sorted_transactions()[:max(limit, 0)]

    def get(self, transaction_id: UUID) -> Optional[Transaction]:
        with self._lock:
            index = self._index_of(transaction_id)
            return None if index is None else self._transactions[index]

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def is_empty(self) -> bool:
        return not self._transactions

    # =========================================================================
    # LISTENERS
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every successful mutation.

        An exception from a listener is logged and does not reach the
        caller of the mutation or stop the remaining listeners.

        Returns a callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add(self, transaction: Transaction) -> None:
        """
        Append a transaction and persist.

        The caller supplies a validated record with a fresh id;
        duplicate ids are not checked.
        """
        with self._lock:
            previous = list(self._transactions)
            self._transactions.append(transaction.model_copy())
            self._commit(previous, StoreChange.added(transaction.id, len(self._transactions)))

        logger.info("transaction_added", transaction_id=str(transaction.id))

    def update(self, transaction: Transaction) -> bool:
        """
        Replace the record with the same id, keeping its position.

        Returns:
            True if a record was replaced, False if the id is unknown
            (nothing changes and nothing is written)
        """
        with self._lock:
            index = self._index_of(transaction.id)
            if index is None:
                logger.info("transaction_update_missed", transaction_id=str(transaction.id))
                return False

            previous = list(self._transactions)
            self._transactions[index] = transaction.model_copy()
            self._commit(previous, StoreChange.updated(transaction.id, len(self._transactions)))

        logger.info("transaction_updated", transaction_id=str(transaction.id))
        return True

    def delete(self, transaction: Transaction) -> bool:
        """Remove the record with the same id as `transaction`."""
        return self.delete_by_id(transaction.id)

    def delete_by_id(self, transaction_id: UUID) -> bool:
        """
        Remove the record with the given id.

        Returns:
            True if a record was removed, False if the id is unknown
        """
        with self._lock:
            index = self._index_of(transaction_id)
            if index is None:
                logger.info("transaction_delete_missed", transaction_id=str(transaction_id))
                return False

            previous = list(self._transactions)
            del self._transactions[index]
            self._commit(previous, StoreChange.deleted([transaction_id], len(self._transactions)))

        logger.info("transaction_deleted", transaction_id=str(transaction_id))
        return True

    def delete_at(
        self,
        indices: Iterable[int],
        ordering: Optional[Sequence[Transaction]] = None,
    ) -> int:
        """
        Remove the records at `indices` of a caller-supplied ordering.

        Args:
            indices: Positions within `ordering`
            ordering: The view the indices refer to, typically the
                      filtered list on screen. Defaults to the
                      date-sorted collection.

        Returns:
            Number of records removed. Persists once.

        Raises:
            IndexError: If any index is outside `ordering`. Nothing
                        is removed in that case.
        """
        with self._lock:
            if ordering is None:
                ordering = sort_by_date_desc(self._transactions)

            positions = sorted(set(indices))
            for position in positions:
                if not 0 <= position < len(ordering):
                    raise IndexError(
                        f"Index {position} out of range for ordering of {len(ordering)}"
                    )

            doomed = {ordering[position].id for position in positions}
            if not doomed:
                return 0

            previous = list(self._transactions)
            removed = [t.id for t in self._transactions if t.id in doomed]
            if not removed:
                return 0

            self._transactions = [t for t in self._transactions if t.id not in doomed]
            self._commit(previous, StoreChange.deleted(removed, len(self._transactions)))

        logger.info("transactions_deleted", count=len(removed))
        return len(removed)

    def clear(self) -> None:
        """Remove every transaction and persist the empty collection."""
        with self._lock:
            previous = list(self._transactions)
            self._transactions = []
            self._commit(previous, StoreChange.cleared([t.id for t in previous]))

        logger.info("transactions_cleared", count=len(previous))

    # =========================================================================
    # AGGREGATES
    # =========================================================================

    def total_income(self) -> Decimal:
        return self._sum(TransactionType.INCOME)

    def total_expense(self) -> Decimal:
        return self._sum(TransactionType.EXPENSE)

    def balance(self) -> Decimal:
        """Total income minus total expense."""
        with self._lock:
            return self.total_income() - self.total_expense()

    def income_on(self, day: date) -> Decimal:
        return self._sum(TransactionType.INCOME, day)

    def expense_on(self, day: date) -> Decimal:
        return self._sum(TransactionType.EXPENSE, day)

    def balance_on(self, day: date) -> Decimal:
        with self._lock:
            return self.income_on(day) - self.expense_on(day)

    def today_income(self) -> Decimal:
        """Income dated on the current local calendar day."""
        return self.income_on(self._today())

    def today_expense(self) -> Decimal:
        """Expense dated on the current local calendar day."""
        return self.expense_on(self._today())

    def today_balance(self) -> Decimal:
        return self.balance_on(self._today())

    def expense_by_category(self) -> list[CategorySummary]:
        """Expense totals per category, largest first."""
        return self._by_category(TransactionType.EXPENSE)

    def income_by_category(self) -> list[CategorySummary]:
        """Income totals per category, largest first."""
        return self._by_category(TransactionType.INCOME)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _index_of(self, transaction_id: UUID) -> Optional[int]:
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return index
        return None

    def _sum(self, transaction_type: TransactionType, day: Optional[date] = None) -> Decimal:
        with self._lock:
            return sum(
                (
                    t.amount
                    for t in self._transactions
                    if t.type == transaction_type and (day is None or t.day == day)
                ),
                Decimal("0"),
            )

    def _by_category(self, transaction_type: TransactionType) -> list[CategorySummary]:
        groups: dict[str, CategorySummary] = {}
        with self._lock:
            for transaction in self._transactions:
                if transaction.type != transaction_type:
                    continue
                summary = groups.get(transaction.category)
                if summary is None:
                    summary = groups[transaction.category] = CategorySummary(
                        category=transaction.category
                    )
                summary.amount += transaction.amount
                summary.transaction_count += 1

        # sorted() is stable, so ties keep first-seen order
        return sorted(groups.values(), key=lambda s: s.amount, reverse=True)

    def _commit(self, previous: list[Transaction], change: StoreChange) -> None:
        """Persist the current collection, rolling back on failure."""
        try:
            self._persistence.save(self._transactions)
        except PersistenceError:
            self._transactions = previous
            logger.error(
                "store_mutation_rolled_back",
                change_type=change.change_type.value,
                transaction_ids=[str(tid) for tid in change.transaction_ids],
            )
            raise

        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("store_listener_failed", **change.to_log_dict())


def create_store(
    persistence: Optional[TransactionPersistence] = None,
) -> TransactionStore:
    """
    Factory function to create the application's store.

    Uses a file-backed blob store in the configured data directory
    unless a persistence adapter is supplied.
    """
    if persistence is None:
        storage_settings = get_settings().storage
        persistence = TransactionPersistence(
            FileBlobStore(storage_settings.data_dir),
            key=storage_settings.transactions_key,
        )
    return TransactionStore(persistence)
