"""Form schemas for every mutating action.

Each schema checks user input before anything is sent to the server.
``MESSAGES`` maps a field to the message shown for any problem with
that field; fields without an entry fall back to pydantic's message.
Update forms accept partial input and only send the fields that were set.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationInfo,
    field_validator,
)

from fintrack.domain.finance.entities import (
    AccountType,
    CategoryType,
    GoalStatus,
    TransactionType,
)
from fintrack.domain.shared.periods import Interval

# Decimals travel as JSON numbers, the way the server expects them
Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]
PositiveAmount = Annotated[Amount, Field(gt=0)]
NonNegativeAmount = Annotated[Amount, Field(ge=0)]
EntityId = Annotated[int, Field(gt=0)]
Name = Annotated[str, Field(min_length=1)]

END_BEFORE_START = "End date must be on or after the start date"


class FormModel(BaseModel):
    """Base class for form schemas."""

    MESSAGES: ClassVar[dict[str, str]] = {}

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the create request."""
        return self.model_dump(mode="json", exclude_none=True)


class PartialFormModel(FormModel):
    """Base class for update forms: every field optional."""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


# =============================================================================
# Accounts
# =============================================================================


class AccountForm(FormModel):
    MESSAGES: ClassVar[dict[str, str]] = {
        "name": "Account name is required",
        "type": "Please select a valid account type",
        "balance": "Balance must be a positive number",
    }

    name: Name
    type: AccountType
    balance: NonNegativeAmount = Decimal("0")
    currency: str = "USD"
    is_active: bool = True


class AccountUpdateForm(PartialFormModel):
    MESSAGES: ClassVar[dict[str, str]] = AccountForm.MESSAGES

    name: Optional[Name] = None
    type: Optional[AccountType] = None
    balance: Optional[NonNegativeAmount] = None
    currency: Optional[str] = None
    is_active: Optional[bool] = None


# =============================================================================
# Categories
# =============================================================================


class CategoryForm(FormModel):
    MESSAGES: ClassVar[dict[str, str]] = {
        "name": "Category name is required",
        "type": "Please select a category type",
    }

    name: Name
    type: CategoryType
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[EntityId] = None


class CategoryUpdateForm(PartialFormModel):
    MESSAGES: ClassVar[dict[str, str]] = CategoryForm.MESSAGES

    name: Optional[Name] = None
    type: Optional[CategoryType] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[EntityId] = None


# =============================================================================
# Transactions
# =============================================================================


class TransactionForm(FormModel):
    MESSAGES: ClassVar[dict[str, str]] = {
        "account_id": "Please select an account",
        "category_id": "Please select a category",
        "type": "Please select a transaction type",
        "amount": "Amount must be greater than 0",
        "transaction_date": "Transaction date is required",
    }

    account_id: EntityId
    category_id: EntityId
    type: TransactionType
    amount: PositiveAmount
    transaction_date: date
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None


class TransactionUpdateForm(PartialFormModel):
    MESSAGES: ClassVar[dict[str, str]] = TransactionForm.MESSAGES

    account_id: Optional[EntityId] = None
    category_id: Optional[EntityId] = None
    type: Optional[TransactionType] = None
    amount: Optional[PositiveAmount] = None
    transaction_date: Optional[date] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None


# =============================================================================
# Budgets
# =============================================================================


class BudgetForm(FormModel):
    MESSAGES: ClassVar[dict[str, str]] = {
        "category_id": "Please select a category",
        "amount": "Amount must be greater than 0",
        "period": "Please select a period",
        "start_date": "Start date is required",
    }

    category_id: Optional[EntityId] = None  # None = overall budget
    amount: PositiveAmount
    period: Interval
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True

    @field_validator("end_date")
    @classmethod
    def _end_after_start(
        cls,
        v: Optional[date],
        info: ValidationInfo,
    ) -> Optional[date]:
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError(END_BEFORE_START)
        return v


class BudgetUpdateForm(PartialFormModel):
    MESSAGES: ClassVar[dict[str, str]] = BudgetForm.MESSAGES

    category_id: Optional[EntityId] = None
    amount: Optional[PositiveAmount] = None
    period: Optional[Interval] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None

    @field_validator("end_date")
    @classmethod
    def _end_after_start(
        cls,
        v: Optional[date],
        info: ValidationInfo,
    ) -> Optional[date]:
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError(END_BEFORE_START)
        return v


# =============================================================================
# Goals
# =============================================================================


class GoalForm(FormModel):
    MESSAGES: ClassVar[dict[str, str]] = {
        "name": "Goal name is required",
        "target_amount": "Target amount must be greater than 0",
        "current_amount": "Current amount must be non-negative",
    }

    name: Name
    target_amount: PositiveAmount
    current_amount: NonNegativeAmount = Decimal("0")
    deadline: Optional[date] = None
    status: GoalStatus = GoalStatus.ACTIVE


class GoalUpdateForm(PartialFormModel):
    MESSAGES: ClassVar[dict[str, str]] = GoalForm.MESSAGES

    name: Optional[Name] = None
    target_amount: Optional[PositiveAmount] = None
    current_amount: Optional[NonNegativeAmount] = None
    deadline: Optional[date] = None
    status: Optional[GoalStatus] = None


class ContributeForm(FormModel):
    """Amount moved into (contribute) or out of (withdraw) a goal."""

    MESSAGES: ClassVar[dict[str, str]] = {
        "amount": "Amount must be greater than 0",
    }

    amount: PositiveAmount
