"""Concrete gateway factory backed by the HTTP client."""

from __future__ import annotations

from fintrack.application.cache import RemoteDataCache
from fintrack.application.mutations import MutationCoordinator
from fintrack.infrastructure.api.client import ApiClient
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


class ApiGatewayFactory:
    """Build gateways that share one HTTP client, cache and coordinator."""

    def __init__(
        self,
        client: ApiClient,
        cache: RemoteDataCache,
        coordinator: MutationCoordinator,
    ):
        self._client = client
        self._cache = cache
        self._coordinator = coordinator

    @property
    def client(self) -> ApiClient:
        return self._client

    @property
    def cache(self) -> RemoteDataCache:
        return self._cache

    @property
    def coordinator(self) -> MutationCoordinator:
        return self._coordinator

    def account_gateway(self) -> AccountGateway:
        return AccountGateway(self._client)

    def category_gateway(self) -> CategoryGateway:
        return CategoryGateway(self._client)

    def transaction_gateway(self) -> TransactionGateway:
        return TransactionGateway(self._client)

    def budget_gateway(self) -> BudgetGateway:
        return BudgetGateway(self._client)

    def goal_gateway(self) -> GoalGateway:
        return GoalGateway(self._client)

    def dashboard_gateway(self) -> DashboardGateway:
        return DashboardGateway(self._client)

    def report_gateway(self) -> ReportGateway:
        return ReportGateway(self._client)

    def auth_gateway(self) -> AuthGateway:
        return AuthGateway(self._client)
