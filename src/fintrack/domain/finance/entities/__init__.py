"""Entities exchanged with the finance API."""

from fintrack.domain.finance.entities.account import Account, AccountType
from fintrack.domain.finance.entities.category import Category, CategoryType
from fintrack.domain.finance.entities.transaction import (
    PageMeta,
    Transaction,
    TransactionFilters,
    TransactionPage,
    TransactionType,
)
from fintrack.domain.finance.entities.budget import Budget, BudgetPeriod, BudgetUsage
from fintrack.domain.finance.entities.goal import Goal, GoalStatus
from fintrack.domain.finance.entities.dashboard import (
    CategorySpending,
    DashboardSummary,
    TrendDataPoint,
)
from fintrack.domain.finance.entities.report import (
    CategoryReport,
    IncomeExpenseSummary,
    ReportPeriod,
    TrendData,
)
from fintrack.domain.finance.entities.user import AuthResponse, User

__all__ = [
    "Account",
    "AccountType",
    "AuthResponse",
    "Budget",
    "BudgetPeriod",
    "BudgetUsage",
    "Category",
    "CategoryReport",
    "CategorySpending",
    "CategoryType",
    "DashboardSummary",
    "Goal",
    "GoalStatus",
    "IncomeExpenseSummary",
    "PageMeta",
    "ReportPeriod",
    "Transaction",
    "TransactionFilters",
    "TransactionPage",
    "TransactionType",
    "TrendData",
    "TrendDataPoint",
    "User",
]
