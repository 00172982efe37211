"""Dashboard summary returned by the server."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fintrack.domain.finance.entities.account import Account
from fintrack.domain.finance.entities.budget import Budget
from fintrack.domain.finance.entities.goal import Goal
from fintrack.domain.finance.entities.transaction import Transaction


class CategorySpending(BaseModel):
    category_id: Optional[int] = None
    category_name: str
    total_amount: Decimal
    percentage: Decimal = Decimal("0")
    color: Optional[str] = None


class TrendDataPoint(BaseModel):
    date: dt.date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """Aggregated overview shown on the landing view."""

    total_balance: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")
    accounts: list[Account] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    spending_by_category: list[CategorySpending] = Field(default_factory=list)
    income_vs_expense_trend: list[TrendDataPoint] = Field(default_factory=list)
