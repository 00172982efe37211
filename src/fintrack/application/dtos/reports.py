"""Report DTOs for tables, charts and exports.

These DTOs are produced by ReportAggregator from raw transactions:
breakdowns for pie charts and bucketed series for line/bar charts.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.domain.shared.periods import Interval


@dataclass
class CategoryBreakdownItem:
    """Single category in a breakdown (one slice of a pie chart)."""

    category_id: Optional[int]
    category_name: str
    amount: Decimal
    transaction_count: int
    percentage: Decimal  # 0-100 share of the type's total


@dataclass
class CategoryBreakdown:
    """Income and expense breakdowns for one date range."""

    income: list[CategoryBreakdownItem] = field(default_factory=list)
    expense: list[CategoryBreakdownItem] = field(default_factory=list)


@dataclass
class TrendPoint:
    """Totals for one bucket of a trend series."""

    period: str
    period_label: str
    start: date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")  # income - expense


@dataclass
class IncomeExpenseReport:
    """Income/expense report for a date range.

    Used for:
    - Income vs. expense totals
    - Category breakdowns (pie charts)
    - Trend series with one point per bucket, empty buckets included
    """

    start: date
    end: date
    interval: Interval
    total_income: Decimal
    total_expense: Decimal
    net_income: Decimal
    income_by_category: list[CategoryBreakdownItem] = field(default_factory=list)
    expense_by_category: list[CategoryBreakdownItem] = field(default_factory=list)
    trend: list[TrendPoint] = field(default_factory=list)
    transaction_count: int = 0
