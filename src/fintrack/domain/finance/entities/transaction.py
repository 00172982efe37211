"""Transaction entity, listing filters and paginated listing."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from fintrack.domain.finance.entities.account import Account
from fintrack.domain.finance.entities.category import Category


class TransactionType(str, Enum):
    """Direction of a transaction; the amount itself is always positive."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"  # Excluded from income and expense totals


def _date_part(value: Any) -> Any:
    # The API sometimes serializes dates as full ISO timestamps
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    if isinstance(value, datetime):
        return value.date()
    return value


class Transaction(BaseModel):
    """A single posted money movement."""

    id: int
    user_id: Optional[int] = None
    account_id: int
    category_id: Optional[int] = None
    type: TransactionType
    amount: Decimal = Field(..., description="Positive amount; sign implied by type")
    transaction_date: date
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    account: Optional[Account] = None
    category: Optional[Category] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> Any:
        return _date_part(v)

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None


class TransactionFilters(BaseModel):
    """Query parameters accepted by the transaction listing endpoint."""

    account_id: Optional[int] = None
    category_id: Optional[int] = None
    type: Optional[TransactionType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    search: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def as_params(self) -> dict[str, Any]:
        """Return only the filters that are set, JSON-friendly."""
        return self.model_dump(mode="json", exclude_none=True)


class PageMeta(BaseModel):
    current_page: int = 1
    from_: Optional[int] = Field(None, alias="from")
    last_page: int = 1
    per_page: int = 15
    to: Optional[int] = None
    total: int = 0

    model_config = {"populate_by_name": True}


class TransactionPage(BaseModel):
    """One page of the paginated transaction listing."""

    data: list[Transaction] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)

    @property
    def has_next(self) -> bool:
        return self.meta.current_page < self.meta.last_page
