"""Finance API client and gateways."""

from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models, unwrap_envelope
from fintrack.infrastructure.api.factory import ApiGatewayFactory
from fintrack.infrastructure.api.gateways import (
    AccountGateway,
    AuthGateway,
    BudgetGateway,
    CategoryGateway,
    DashboardGateway,
    GoalGateway,
    ReportGateway,
    TransactionGateway,
)

__all__ = [
    "AccountGateway",
    "ApiClient",
    "ApiGatewayFactory",
    "AuthGateway",
    "BudgetGateway",
    "CategoryGateway",
    "DashboardGateway",
    "GoalGateway",
    "ReportGateway",
    "TransactionGateway",
    "parse_model",
    "parse_models",
    "unwrap_envelope",
]
