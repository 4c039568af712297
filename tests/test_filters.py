"""Tests for transaction list filters."""

import pytest
from datetime import datetime

from pydantic import ValidationError

from accountant.models import TransactionType
from accountant.queries import ALL_CATEGORIES, TransactionFilter, TypeFilter


@pytest.fixture
def mixed(make_transaction):
    return [
        make_transaction(1000, "Salary", "Salary", TransactionType.INCOME, datetime(2025, 11, 1, 9)),
        make_transaction(200, "Lunch", "Food", TransactionType.EXPENSE, datetime(2025, 11, 3, 13)),
        make_transaction(30, "Bus", "Transport", TransactionType.EXPENSE, datetime(2025, 11, 2, 8)),
        make_transaction(50, "Gift", "Other", TransactionType.INCOME, datetime(2025, 11, 2, 18)),
        make_transaction(15, "Misc", "Other", TransactionType.EXPENSE, datetime(2025, 10, 30, 10)),
    ]


class TestTransactionFilter:
    """Tests for applying filters."""

    def test_default_shows_everything_newest_first(self, mixed):
        visible = TransactionFilter().apply(mixed)
        assert [t.description for t in visible] == ["Lunch", "Gift", "Bus", "Salary", "Misc"]

    def test_type_filter(self, mixed):
        visible = TransactionFilter(type_filter=TypeFilter.INCOME).apply(mixed)
        assert [t.description for t in visible] == ["Gift", "Salary"]

    def test_type_and_category_filter(self, mixed):
        visible = TransactionFilter(type_filter=TypeFilter.EXPENSE, category="Other").apply(mixed)
        assert [t.description for t in visible] == ["Misc"]

    def test_category_filter_across_types(self, mixed):
        visible = TransactionFilter(category="Other").apply(mixed)
        assert [t.description for t in visible] == ["Gift", "Misc"]

    def test_filter_is_immutable(self):
        with pytest.raises(ValidationError):
            TransactionFilter().category = "Food"


class TestCategoryChoices:
    """Tests for category choices and reset behaviour."""

    def test_available_categories_all_types(self, mixed):
        assert TransactionFilter().available_categories(mixed) == [
            ALL_CATEGORIES, "Food", "Other", "Salary", "Transport",
        ]

    def test_available_categories_follow_type_filter(self, mixed):
        income = TransactionFilter(type_filter=TypeFilter.INCOME)
        assert income.available_categories(mixed) == [ALL_CATEGORIES, "Other", "Salary"]

    def test_available_categories_ignore_category_filter(self, mixed):
        """Test choices come from the type-filtered subset, not the visible set."""
        narrowed = TransactionFilter(type_filter=TypeFilter.EXPENSE, category="Food")
        assert narrowed.available_categories(mixed) == [
            ALL_CATEGORIES, "Food", "Other", "Transport",
        ]

    def test_changing_type_resets_unavailable_category(self, mixed):
        current = TransactionFilter(type_filter=TypeFilter.EXPENSE, category="Food")
        changed = current.with_type(TypeFilter.INCOME, mixed)

        assert changed.type_filter == TypeFilter.INCOME
        assert changed.category == ALL_CATEGORIES

    def test_changing_type_keeps_available_category(self, mixed):
        current = TransactionFilter(type_filter=TypeFilter.EXPENSE, category="Other")
        changed = current.with_type(TypeFilter.INCOME, mixed)

        assert changed.category == "Other"

    def test_category_gone_from_collection_falls_back_to_all(self, mixed):
        """Test deleting the last transaction of the filtered category."""
        current = TransactionFilter(type_filter=TypeFilter.EXPENSE, category="Food")
        remaining = [t for t in mixed if t.category != "Food"]

        normalized = current.normalized(remaining)

        assert normalized.type_filter == TypeFilter.EXPENSE
        assert normalized.category == ALL_CATEGORIES
        assert [t.description for t in normalized.apply(remaining)] == ["Bus", "Misc"]

    def test_normalized_keeps_available_category(self, mixed):
        current = TransactionFilter(category="Food")
        assert current.normalized(mixed) is current

    def test_with_category(self):
        changed = TransactionFilter(type_filter=TypeFilter.EXPENSE).with_category("Food")
        assert changed.type_filter == TypeFilter.EXPENSE
        assert changed.category == "Food"

    def test_empty_collection(self):
        assert TransactionFilter().available_categories([]) == [ALL_CATEGORIES]
        assert TransactionFilter().apply([]) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
