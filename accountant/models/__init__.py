"""
Data Models Package

This package contains all Pydantic models used by the transaction store.
"""

from accountant.models.transaction import (
    Amount,
    CategorySummary,
    Transaction,
    TransactionType,
    is_storable_amount,
    to_local_naive,
)
from accountant.models.category import (
    DEFAULT_CATEGORY,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    default_category,
    suggested_categories,
)
from accountant.models.events import ChangeType, StoreChange

__all__ = [
    # Transaction models
    "Amount",
    "CategorySummary",
    "Transaction",
    "TransactionType",
    "is_storable_amount",
    "to_local_naive",
    # Categories
    "DEFAULT_CATEGORY",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "default_category",
    "suggested_categories",
    # Change events
    "ChangeType",
    "StoreChange",
]
