"""Dashboard summary reads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fintrack.application.cache import QueryKey, RemoteDataCache, ResourceFamily
from fintrack.application.ports import DashboardPort
from fintrack.domain.finance.entities import DashboardSummary

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory

DASHBOARD_KEY = QueryKey.of(ResourceFamily.DASHBOARD)


class DashboardService:
    def __init__(self, gateway: DashboardPort, cache: RemoteDataCache):
        self._gateway = gateway
        self._cache = cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> DashboardService:
        return cls(gateway=factory.dashboard_gateway(), cache=factory.cache)

    async def summary(self) -> DashboardSummary:
        return await self._cache.read(DASHBOARD_KEY, self._fetch)

    async def refresh(self) -> DashboardSummary:
        """Mark the summary stale and fetch it again."""
        self._cache.invalidate(DASHBOARD_KEY)
        return await self.summary()

    async def _fetch(self, _key: QueryKey) -> DashboardSummary:
        return await self._gateway.summary()
