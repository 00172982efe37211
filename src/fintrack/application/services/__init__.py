"""Application services: cached reads, validated writes, reporting."""

from fintrack.application.services.account_service import AccountService
from fintrack.application.services.budget_service import BudgetService
from fintrack.application.services.category_service import CategoryService
from fintrack.application.services.dashboard_refresher import DashboardRefresher
from fintrack.application.services.dashboard_service import DashboardService
from fintrack.application.services.goal_service import GoalService
from fintrack.application.services.report_aggregator import ReportAggregator
from fintrack.application.services.report_service import ReportService
from fintrack.application.services.transaction_service import TransactionService

__all__ = [
    "AccountService",
    "BudgetService",
    "CategoryService",
    "DashboardRefresher",
    "DashboardService",
    "GoalService",
    "ReportAggregator",
    "ReportService",
    "TransactionService",
]
