from fintrack.application.dtos.reports import (
    CategoryBreakdown,
    CategoryBreakdownItem,
    IncomeExpenseReport,
    TrendPoint,
)

__all__ = [
    "CategoryBreakdown",
    "CategoryBreakdownItem",
    "IncomeExpenseReport",
    "TrendPoint",
]
