"""Budget entity."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from fintrack.domain.finance.entities.category import Category
from fintrack.domain.finance.services import metrics
from fintrack.domain.finance.value_objects import BudgetUtilization
from fintrack.domain.shared.periods import Interval

BudgetPeriod = Interval


class BudgetUsage(BaseModel):
    """Utilization snapshot as reported by the server."""

    spent: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    remaining: Decimal = Decimal("0")


class Budget(BaseModel):
    """Spending ceiling for one category (or overall) per period."""

    id: int
    user_id: Optional[int] = None
    category_id: Optional[int] = Field(None, description="None means an overall budget")
    amount: Decimal
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    category: Optional[Category] = None
    utilization: Optional[BudgetUsage] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_overall(self) -> bool:
        return self.category_id is None

    @property
    def spent(self) -> Decimal:
        """Spent-to-date as last reported by the server (0 if unknown)."""
        return self.utilization.spent if self.utilization else Decimal("0")

    def usage(
        self,
        transactions: Optional[Iterable] = None,
        today: Optional[date] = None,
    ) -> BudgetUtilization:
        """Compute utilization, from ``transactions`` when given.

        Without transactions the server-reported spent amount is used.
        """
        if transactions is None:
            spent = self.spent
        else:
            spent = metrics.budget_spent(self, transactions, today)
        return metrics.budget_utilization(spent, self.amount)
