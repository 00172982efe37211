"""Reports computed server-side by the reporting endpoints."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ReportPeriod(BaseModel):
    start: dt.date
    end: dt.date


class CategoryReport(BaseModel):
    """Per-category slice of a server report."""

    category_id: Optional[int] = None
    category_name: str
    amount: Decimal
    percentage: Decimal = Decimal("0")
    transaction_count: int = 0


class IncomeExpenseSummary(BaseModel):
    """Server-side income vs. expense report for a date range."""

    period: ReportPeriod
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")
    income_by_category: list[CategoryReport] = Field(default_factory=list)
    expense_by_category: list[CategoryReport] = Field(default_factory=list)


class TrendData(BaseModel):
    date: str  # Bucket label as returned by the server
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
