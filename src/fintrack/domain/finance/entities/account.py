"""Account entity."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AccountType(str, Enum):
    """Kinds of money holders a user can track."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"  # Balance may be negative
    CASH = "cash"
    INVESTMENT = "investment"


class Account(BaseModel):
    """A money holder owned by the authenticated user.

    The balance is signed: credit accounts routinely carry a negative
    balance, so no sign invariant is enforced here.
    """

    id: int = Field(..., description="Server-assigned identifier")
    user_id: Optional[int] = Field(None, description="Owner user ID")
    name: str = Field(..., description="Display name")
    type: AccountType = Field(..., description="Account type")
    balance: Decimal = Field(Decimal("0"), description="Current balance (signed)")
    currency: str = Field("USD", description="ISO 4217 currency code")
    is_active: bool = Field(True, description="Inactive accounts are hidden from pickers")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
