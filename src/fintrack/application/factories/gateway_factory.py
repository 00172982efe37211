"""Gateway factory protocol for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fintrack.application.ports import (
    AccountPort,
    AuthPort,
    BudgetPort,
    CategoryPort,
    DashboardPort,
    GoalPort,
    ReportPort,
    TransactionPort,
)

if TYPE_CHECKING:
    from fintrack.application.cache import RemoteDataCache
    from fintrack.application.mutations import MutationCoordinator


class GatewayFactory(Protocol):
    """Protocol for creating session-scoped gateways.

    Services are built from one factory so that they share the session's
    cache and mutation coordinator.
    """

    @property
    def cache(self) -> RemoteDataCache:
        """Get the session cache."""
        ...

    @property
    def coordinator(self) -> MutationCoordinator:
        """Get the mutation coordinator bound to the session cache."""
        ...

    def account_gateway(self) -> AccountPort: ...

    def category_gateway(self) -> CategoryPort: ...

    def transaction_gateway(self) -> TransactionPort: ...

    def budget_gateway(self) -> BudgetPort: ...

    def goal_gateway(self) -> GoalPort: ...

    def dashboard_gateway(self) -> DashboardPort: ...

    def report_gateway(self) -> ReportPort: ...

    def auth_gateway(self) -> AuthPort: ...
