"""
Store Change Events

Every successful mutation of the transaction store produces one
StoreChange. Listeners (typically the presentation layer) use it to
know when to re-read state.

DESIGN DECISION: Changes are notifications, not a history. They are
never persisted and cannot be replayed.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class ChangeType(str, Enum):
    """Kinds of store mutation."""
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    CLEARED = "cleared"


class StoreChange(BaseModel):
    """A single store mutation that has been applied and persisted."""

    change_type: ChangeType = Field(
        ...,
        description="What kind of mutation happened"
    )
    transaction_ids: list[UUID] = Field(
        default_factory=list,
        description="Transactions touched by the mutation"
    )
    count: int = Field(
        default=0,
        ge=0,
        description="Size of the collection after the mutation"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the change was applied"
    )

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for structured logging."""
        return {
            "change_type": self.change_type.value,
            "transaction_ids": [str(tid) for tid in self.transaction_ids],
            "count": self.count,
        }

    @classmethod
    def added(cls, transaction_id: UUID, count: int) -> "StoreChange":
        return cls(
            change_type=ChangeType.ADDED,
            transaction_ids=[transaction_id],
            count=count,
        )

    @classmethod
    def updated(cls, transaction_id: UUID, count: int) -> "StoreChange":
        return cls(
            change_type=ChangeType.UPDATED,
            transaction_ids=[transaction_id],
            count=count,
        )

    @classmethod
    def deleted(cls, transaction_ids: list[UUID], count: int) -> "StoreChange":
        return cls(
            change_type=ChangeType.DELETED,
            transaction_ids=list(transaction_ids),
            count=count,
        )

    @classmethod
    def cleared(cls, transaction_ids: list[UUID]) -> "StoreChange":
        return cls(
            change_type=ChangeType.CLEARED,
            transaction_ids=list(transaction_ids),
            count=0,
        )
