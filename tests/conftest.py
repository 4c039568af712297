"""Shared fixtures for the transaction store tests."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from accountant.config import get_settings
from accountant.models import Transaction, TransactionType
from accountant.services.storage import InMemoryBlobStore, TransactionPersistence
from accountant.store import TransactionStore


TODAY = date(2025, 11, 3)


def build_transaction(
    amount,
    description="Test",
    category="Other",
    transaction_type=TransactionType.EXPENSE,
    when=None,
) -> Transaction:
    """Build a transaction with sensible defaults."""
    return Transaction(
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        type=transaction_type,
        date=when or datetime.combine(TODAY, datetime.min.time()).replace(hour=12),
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings away from the real home directory and .env."""
    for name in (
        "APP_ENVIRONMENT",
        "DEBUG_MODE",
        "LOG_LEVEL",
        "CURRENCY_SYMBOL",
        "RECENT_TRANSACTIONS_LIMIT",
        "MAX_TRANSACTION_AMOUNT",
        "FUTURE_DATE_TOLERANCE_DAYS",
        "ACCOUNTANT_STORAGE_TRANSACTIONS_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ACCOUNTANT_STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def persistence(blob_store) -> TransactionPersistence:
    return TransactionPersistence(blob_store)


@pytest.fixture
def store(persistence) -> TransactionStore:
    """Empty store whose "today" is fixed to TODAY."""
    return TransactionStore(persistence, today=lambda: TODAY)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """The salary / lunch / coffee scenario."""
    return [
        build_transaction(
            1000, "Salary", "Salary", TransactionType.INCOME,
            datetime(2025, 11, 3, 9, 0),
        ),
        build_transaction(
            200, "Lunch", "Food", TransactionType.EXPENSE,
            datetime(2025, 11, 3, 13, 0),
        ),
        build_transaction(
            50, "Coffee", "Food", TransactionType.EXPENSE,
            datetime(2025, 11, 2, 23, 30),
        ),
    ]


@pytest.fixture
def populated_store(store, sample_transactions) -> TransactionStore:
    for transaction in sample_transactions:
        store.add(transaction)
    return store


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_transaction():
    """Factory for transactions dated today unless told otherwise."""
    return build_transaction
