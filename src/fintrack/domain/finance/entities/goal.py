"""Savings goal entity."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from fintrack.domain.finance.services import metrics


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Goal(BaseModel):
    """A savings target funded through contributions and withdrawals.

    ``current_amount`` may exceed ``target_amount``; progress is still
    reported as 100%.
    """

    id: int
    user_id: Optional[int] = None
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None
    status: GoalStatus = GoalStatus.ACTIVE
    progress_percentage: Optional[Decimal] = None  # Server-computed, informational
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def progress(self) -> Decimal:
        return metrics.goal_progress(self.current_amount, self.target_amount)

    @property
    def remaining(self) -> Decimal:
        return metrics.goal_remaining(self.current_amount, self.target_amount)

    @property
    def is_reached(self) -> bool:
        return self.target_amount > 0 and self.current_amount >= self.target_amount

    def days_remaining(self, today: Optional[date] = None) -> Optional[int]:
        return metrics.goal_days_remaining(self.deadline, today)
