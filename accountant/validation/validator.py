"""
Transaction Input Validation

DESIGN DECISION: Raw form input is validated here, before anything
reaches the store. The store trusts its callers and never re-checks.

Issues come in two severities:

ERROR - the transaction cannot be built:
- Empty description
- Empty category
- Missing, non-numeric or non-finite amount
- Amount with more digits than a saved JSON number keeps
- Negative amount
- Unknown transaction type

WARNING - the transaction can be built but deserves a second look:
- Zero amount
- Unusually large amount
- Date far in the future

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the user to correct.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from accountant.config import AppSettings, get_settings
from accountant.models.transaction import (
    Transaction,
    TransactionType,
    is_storable_amount,
    to_local_naive,
)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Result of validating one set of form input."""

    is_valid: bool = Field(
        ...,
        description="True if no error-level issues were found"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Parsed amount, when parsing succeeded"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


class TransactionValidationError(ValueError):
    """Form input could not be turned into a transaction."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.errors)
        super().__init__(f"Invalid transaction: {messages}")


class TransactionValidator:
    """Validates entry-form input and builds transactions from it."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def parse_amount(
        self,
        amount: Union[str, Decimal, int, float, None],
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Parse the amount field.

        Returns: (amount_or_None, list_of_issues)
        """
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            )]

        text = str(amount).strip()
        value = None
        # Decimal() also accepts Python digit grouping such as "1_000"
        if "_" not in text:
            try:
                value = Decimal(text)
            except InvalidOperation:
                pass

        if value is None:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount '{amount}' is not a number",
                severity="error",
                suggested_fix="Use digits with a '.' for decimals, e.g. 12.50",
            )]

        if not value.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a finite number",
                severity="error",
            )]

        if not is_storable_amount(value):
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Amount {value} has more digits than can be saved exactly",
                severity="error",
                suggested_fix="Use at most 15 significant digits",
            )]

        issues = []
        if value < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
                severity="error",
                suggested_fix="Enter the size of the amount and pick Income or Expense",
            ))
        elif value == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))
        elif value > self._settings.max_transaction_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount {value} is unusually large",
                severity="warning",
                suggested_fix="Please verify the amount is correct",
            ))

        return value, issues

    def validate(
        self,
        amount: Union[str, Decimal, int, float, None],
        description: Optional[str],
        category: Optional[str],
        transaction_type: TransactionType,
        when: Optional[datetime] = None,
    ) -> ValidationResult:
        """Check all form fields and collect every issue found."""
        parsed, issues = self.parse_amount(amount)

        try:
            TransactionType(transaction_type)
        except ValueError:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message=f"Unknown transaction type: {transaction_type}",
                severity="error",
                suggested_fix="Pick Income or Expense",
            ))

        if not description or not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
            ))

        if not category or not category.strip():
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
                suggested_fix="Pick one of the suggested categories",
            ))

        if when is not None:
            today = date.today()
            max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
            day = to_local_naive(when).date()
            if day > max_future_date:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message=f"Date ({day}) is in the future",
                    severity="warning",
                    suggested_fix="Please verify the date is correct",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return ValidationResult(is_valid=is_valid, amount=parsed, issues=issues)

    def build(
        self,
        amount: Union[str, Decimal, int, float, None],
        description: Optional[str],
        category: Optional[str],
        transaction_type: TransactionType,
        when: Optional[datetime] = None,
        transaction_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Validate input and build a transaction from it.

        Pass `transaction_id` when editing so the result can replace
        the existing record.

        Raises:
            TransactionValidationError: If any error-level issue is found
        """
        transaction, _ = self.build_with_result(
            amount, description, category, transaction_type, when, transaction_id,
        )
        return transaction

    def build_with_result(
        self,
        amount: Union[str, Decimal, int, float, None],
        description: Optional[str],
        category: Optional[str],
        transaction_type: TransactionType,
        when: Optional[datetime] = None,
        transaction_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """Like `build`, but also return the result so warnings can be shown."""
        result = self.validate(amount, description, category, transaction_type, when)
        if not result.is_valid:
            raise TransactionValidationError(result)

        fields = {
            "amount": result.amount,
            "description": description,
            "category": category,
            "type": transaction_type,
        }
        if when is not None:
            fields["date"] = when
        if transaction_id is not None:
            fields["id"] = transaction_id
        return Transaction(**fields), result
