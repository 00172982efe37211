"""Dashboard endpoint."""

from __future__ import annotations

from fintrack.application.ports import DashboardPort
from fintrack.domain.finance.entities import DashboardSummary
from fintrack.infrastructure.api.client import ApiClient, parse_model


class DashboardGateway(DashboardPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def summary(self) -> DashboardSummary:
        data = await self._client.get_data("/dashboard")
        return parse_model(DashboardSummary, data)
