"""Tests for entry-form validation."""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from accountant.config import AppSettings
from accountant.models import TransactionType
from accountant.validation import (
    TransactionValidationError,
    TransactionValidator,
    ValidationIssue,
    ValidationResult,
)


@pytest.fixture
def validator():
    return TransactionValidator(AppSettings(
        max_transaction_amount=Decimal("10000"),
        future_date_tolerance_days=7,
    ))


class TestAmountParsing:
    """Tests for the amount field."""

    def test_valid_amount(self, validator):
        amount, issues = validator.parse_amount("12.50")
        assert amount == Decimal("12.50")
        assert issues == []

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_amount(self, validator, raw):
        amount, issues = validator.parse_amount(raw)
        assert amount is None
        assert issues[0].issue_type == "missing"
        assert issues[0].severity == "error"

    @pytest.mark.parametrize("raw", ["abc", "12,50,1", "NaN", "Infinity", "1_000", "1_0.5"])
    def test_non_numeric_amount(self, validator, raw):
        amount, issues = validator.parse_amount(raw)
        assert amount is None
        assert issues[0].severity == "error"

    def test_negative_amount_is_error(self, validator):
        amount, issues = validator.parse_amount("-5")
        assert amount == Decimal("-5")
        assert issues[0].issue_type == "invalid_value"
        assert issues[0].severity == "error"

    def test_amount_too_precise_to_save_is_error(self, validator):
        amount, issues = validator.parse_amount("12345678901234567.89")
        assert amount is None
        assert issues[0].issue_type == "invalid_value"
        assert issues[0].severity == "error"

    def test_zero_amount_is_warning(self, validator):
        _, issues = validator.parse_amount("0")
        assert issues[0].severity == "warning"

    def test_large_amount_is_warning(self, validator):
        _, issues = validator.parse_amount("50000")
        assert issues[0].issue_type == "suspicious_value"
        assert issues[0].severity == "warning"


class TestValidate:
    """Tests for whole-form validation."""

    def test_valid_input(self, validator):
        result = validator.validate("20", "Lunch", "Food", TransactionType.EXPENSE)
        assert result.is_valid
        assert result.amount == Decimal("20")
        assert result.issues == []

    def test_empty_description_and_category(self, validator):
        result = validator.validate("20", "  ", "", TransactionType.EXPENSE)

        assert not result.is_valid
        assert {issue.field for issue in result.errors} == {"description", "category"}
        assert result.error_count == 2

    def test_unknown_type_is_error(self, validator):
        result = validator.validate("20", "Lunch", "Food", "Transfer")
        assert not result.is_valid
        assert result.errors[0].field == "type"

    def test_future_date_is_warning(self, validator):
        result = validator.validate(
            "20", "Lunch", "Food", TransactionType.EXPENSE,
            when=datetime.now() + timedelta(days=30),
        )
        assert result.is_valid
        assert result.warnings[0].issue_type == "future_date"

    def test_near_future_date_is_fine(self, validator):
        result = validator.validate(
            "20", "Lunch", "Food", TransactionType.EXPENSE,
            when=datetime.now() + timedelta(days=2),
        )
        assert result.issues == []


class TestBuild:
    """Tests for building transactions from input."""

    def test_build_new_transaction(self, validator):
        when = datetime(2025, 11, 3, 12, 0)
        transaction = validator.build("1000", "Salary", "Salary", TransactionType.INCOME, when=when)

        assert transaction.amount == Decimal("1000")
        assert transaction.type == TransactionType.INCOME
        assert transaction.date == when

    def test_build_keeps_id_when_editing(self, validator):
        transaction_id = uuid4()
        transaction = validator.build(
            "5", "Coffee", "Food", TransactionType.EXPENSE, transaction_id=transaction_id,
        )
        assert transaction.id == transaction_id

    def test_build_raises_with_result(self, validator):
        with pytest.raises(TransactionValidationError) as exc_info:
            validator.build("abc", "", "Food", TransactionType.EXPENSE)

        result = exc_info.value.result
        assert result.error_count == 2
        assert "Description is required" in str(exc_info.value)

    def test_build_with_result_returns_warnings(self, validator):
        transaction, result = validator.build_with_result(
            "0", "Refund", "Other", TransactionType.INCOME,
        )
        assert transaction.amount == Decimal("0")
        assert [issue.message for issue in result.warnings] == ["Amount is zero"]

    def test_validation_error_is_value_error(self, validator):
        with pytest.raises(ValueError):
            validator.build("-1", "Refund", "Other", TransactionType.INCOME)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_warnings_are_not_errors(self):
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="suspicious_value",
                    message="Amount is zero",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert len(result.warnings) == 1

    def test_severity_must_be_known(self):
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
