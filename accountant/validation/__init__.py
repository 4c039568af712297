"""Input validation package."""

from accountant.validation.validator import (
    TransactionValidationError,
    TransactionValidator,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "TransactionValidationError",
    "TransactionValidator",
    "ValidationIssue",
    "ValidationResult",
]
