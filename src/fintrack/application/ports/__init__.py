"""Application layer ports (aka interfaces)."""

from fintrack.application.ports.gateways import (
    AccountPort,
    AuthPort,
    BudgetPort,
    CategoryPort,
    DashboardPort,
    GoalPort,
    Payload,
    ReportPort,
    TransactionPort,
)

__all__ = [
    "AccountPort",
    "AuthPort",
    "BudgetPort",
    "CategoryPort",
    "DashboardPort",
    "GoalPort",
    "Payload",
    "ReportPort",
    "TransactionPort",
]
