"""
Core Data Models for Personal Accountant

These models define the schemas for the data the transaction store owns.
They are designed to:
1. Keep identity stable (a transaction id never changes)
2. Carry amounts as Decimal in memory; on disk they are JSON numbers,
   so only amounts within double precision are accepted as input
3. Be serializable for storage and export

DESIGN DECISION: The entity itself does not enforce business rules such
as "description must not be empty" or "amount must not be negative".
Those checks live in the validation layer, which is the only place raw
user input enters the system.
"""

from datetime import date as calendar_date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of a transaction.

    The sign of a transaction is carried here, never in the amount.
    """
    INCOME = "Income"
    EXPENSE = "Expense"


# Amounts are numbers on the wire and Decimal in memory
Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


def is_storable_amount(value: Decimal) -> bool:
    """True if the amount survives being written as a JSON number unchanged."""
    return Decimal(str(float(value))) == value


def to_local_naive(value: datetime) -> datetime:
    """Express a datetime as naive local time (naive input is already local)."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    `id` is assigned at construction and frozen. All other fields
    may be edited; the store replaces whole records on update.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique transaction ID"
    )
    amount: Amount = Field(
        ...,
        description="Magnitude of the transaction"
    )
    description: str = Field(
        ...,
        description="Free text label shown as the transaction name"
    )
    category: str = Field(
        ...,
        description="Free text category"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the transaction happened"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def float_via_str(cls, v: Any) -> Any:
        """Convert floats through str so 12.34 stays 12.34."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def local_date(self) -> datetime:
        """The transaction date as naive local time."""
        return to_local_naive(self.date)

    @property
    def day(self) -> calendar_date:
        """Calendar day of the transaction in the local timezone."""
        return self.local_date.date()


# =============================================================================
# AGGREGATION MODELS
# =============================================================================

class CategorySummary(BaseModel):
    """
    Total of one category within one transaction type.

    Produced by the store's category breakdowns. Display concerns such
    as chart colours are left to the presentation layer.
    """

    category: str
    amount: Decimal = Field(default=Decimal("0"))
    transaction_count: int = Field(default=0, ge=0)

    def share_of(self, total: Decimal) -> Decimal:
        """Percentage of `total` this category accounts for."""
        if not total:
            return Decimal("0")
        return self.amount / total * 100
