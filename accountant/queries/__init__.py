"""Transaction query package."""

from accountant.queries.filters import ALL_CATEGORIES, TransactionFilter, TypeFilter

__all__ = ["ALL_CATEGORIES", "TransactionFilter", "TypeFilter"]
