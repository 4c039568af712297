"""
Suggested Categories

Categories are free text. These lists only seed the entry form with
sensible choices for each transaction type.
"""

from accountant.models.transaction import TransactionType


EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Education",
    "Other",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other",
)

DEFAULT_CATEGORY: dict[TransactionType, str] = {
    TransactionType.INCOME: "Salary",
    TransactionType.EXPENSE: "Food",
}


def suggested_categories(transaction_type: TransactionType) -> tuple[str, ...]:
    """Categories offered for a transaction type."""
    if transaction_type == TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def default_category(transaction_type: TransactionType) -> str:
    """Category pre-selected when the entry form switches type."""
    return DEFAULT_CATEGORY[transaction_type]
