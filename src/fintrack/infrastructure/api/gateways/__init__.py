"""One gateway per resource family of the finance API."""

from fintrack.infrastructure.api.gateways.accounts import AccountGateway
from fintrack.infrastructure.api.gateways.auth import AuthGateway
from fintrack.infrastructure.api.gateways.budgets import BudgetGateway
from fintrack.infrastructure.api.gateways.categories import CategoryGateway
from fintrack.infrastructure.api.gateways.dashboard import DashboardGateway
from fintrack.infrastructure.api.gateways.goals import GoalGateway
from fintrack.infrastructure.api.gateways.reports import ReportGateway
from fintrack.infrastructure.api.gateways.transactions import TransactionGateway

__all__ = [
    "AccountGateway",
    "AuthGateway",
    "BudgetGateway",
    "CategoryGateway",
    "DashboardGateway",
    "GoalGateway",
    "ReportGateway",
    "TransactionGateway",
]
