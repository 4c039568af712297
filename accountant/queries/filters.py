"""
Transaction Filters

Query logic behind the transaction list: a type filter and a category
filter, applied to the store's collection and sorted newest first.

DESIGN DECISION: The category choices offered to the user come from the
type-filtered subset only. Switching the type or changing the collection
can make the current category unavailable, in which case it falls back
to "All".
"""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from accountant.models.transaction import Transaction, TransactionType
from accountant.store import sort_by_date_desc


ALL_CATEGORIES = "All"


class TypeFilter(str, Enum):
    """Which transaction types the list shows."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    def matches(self, transaction: Transaction) -> bool:
        if self == TypeFilter.INCOME:
            return transaction.type == TransactionType.INCOME
        if self == TypeFilter.EXPENSE:
            return transaction.type == TransactionType.EXPENSE
        return True


class TransactionFilter(BaseModel):
    """
    Current list filter.

    Immutable; use `with_type` / `with_category` to derive a new one.
    """
    model_config = ConfigDict(frozen=True)

    type_filter: TypeFilter = Field(
        default=TypeFilter.ALL,
        description="Transaction type to show"
    )
    category: str = Field(
        default=ALL_CATEGORIES,
        description="Category to show, or 'All'"
    )

    def matches(self, transaction: Transaction) -> bool:
        if not self.type_filter.matches(transaction):
            return False
        return self.category == ALL_CATEGORIES or transaction.category == self.category

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """Matching transactions, newest first."""
        return sort_by_date_desc(t for t in transactions if self.matches(t))

    def available_categories(self, transactions: Iterable[Transaction]) -> list[str]:
        """
        Category choices for the current type filter.

        "All" first, then the distinct categories of the type-filtered
        subset in alphabetical order.
        """
        categories = {
            t.category for t in transactions if self.type_filter.matches(t)
        }
        categories.discard(ALL_CATEGORIES)
        return [ALL_CATEGORIES] + sorted(categories)

    def with_type(
        self,
        type_filter: TypeFilter,
        transactions: Iterable[Transaction],
    ) -> "TransactionFilter":
        """Change the type, resetting the category if it is no longer offered."""
        return TransactionFilter(
            type_filter=type_filter, category=self.category
        ).normalized(transactions)

    def normalized(self, transactions: Iterable[Transaction]) -> "TransactionFilter":
        """
        This filter with the category reset to "All" if it is no longer offered.

        Call after the collection changes: deleting or editing the last
        transaction of a category removes that choice.
        """
        if self.category in self.available_categories(transactions):
            return self
        return TransactionFilter(type_filter=self.type_filter)

    def with_category(self, category: str) -> "TransactionFilter":
        return TransactionFilter(type_filter=self.type_filter, category=category)
