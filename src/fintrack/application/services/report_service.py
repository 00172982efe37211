"""Reports: server-side summaries, local aggregation and exports.

Every entry point validates the date range before any network call.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, Literal, Optional

from fintrack.application.cache import QueryKey, RemoteDataCache, ResourceFamily
from fintrack.application.dtos import IncomeExpenseReport
from fintrack.application.ports import ReportPort
from fintrack.application.services.category_service import CategoryService
from fintrack.application.services.report_aggregator import ReportAggregator
from fintrack.application.services.transaction_service import TransactionService
from fintrack.domain.finance.entities import (
    CategoryReport,
    IncomeExpenseSummary,
    TrendData,
)
from fintrack.domain.shared.periods import Interval, ensure_valid_range

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "pdf"]


class ReportService:
    def __init__(  # NOQA: PLR0913
        self,
        gateway: ReportPort,
        cache: RemoteDataCache,
        transactions: TransactionService,
        categories: CategoryService,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self._gateway = gateway
        self._cache = cache
        self._transactions = transactions
        self._categories = categories
        self._aggregator = aggregator or ReportAggregator()

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> ReportService:
        return cls(
            gateway=factory.report_gateway(),
            cache=factory.cache,
            transactions=TransactionService.from_factory(factory),
            categories=CategoryService.from_factory(factory),
        )

    # -------------------------------------------------------------------------
    # Server-side reports
    # -------------------------------------------------------------------------

    async def income_expense(self, start: date, end: date) -> IncomeExpenseSummary:
        ensure_valid_range(start, end)
        return await self._cache.read(
            QueryKey.of(ResourceFamily.REPORTS, kind="income-expense", start=start, end=end),
            lambda _key: self._gateway.income_expense(start, end),
        )

    async def by_category(self, start: date, end: date) -> list[CategoryReport]:
        ensure_valid_range(start, end)
        return await self._cache.read(
            QueryKey.of(ResourceFamily.REPORTS, kind="by-category", start=start, end=end),
            lambda _key: self._gateway.by_category(start, end),
        )

    async def trends(
        self,
        start: date,
        end: date,
        interval: Interval = Interval.DAILY,
    ) -> list[TrendData]:
        ensure_valid_range(start, end)
        interval = Interval(interval)
        return await self._cache.read(
            QueryKey.of(
                ResourceFamily.REPORTS,
                kind="trends",
                start=start,
                end=end,
                interval=interval,
            ),
            lambda _key: self._gateway.trends(start, end, interval),
        )

    async def export(
        self,
        fmt: ExportFormat,
        start: date,
        end: date,
        **filters: Any,
    ) -> bytes:
        """Download the report rendered by the server (never cached)."""
        ensure_valid_range(start, end)
        if fmt not in ("csv", "pdf"):
            msg = f"Unsupported export format: {fmt}"
            raise ValueError(msg)
        return await self._gateway.export(fmt, start, end, **filters)

    # -------------------------------------------------------------------------
    # Local aggregation
    # -------------------------------------------------------------------------

    async def build_report(
        self,
        start: date,
        end: date,
        interval: Interval = Interval.MONTHLY,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> IncomeExpenseReport:
        """Aggregate the range's transactions client-side."""
        ensure_valid_range(start, end)
        transactions = await self._transactions.list_range(
            start,
            end,
            account_id=account_id,
            category_id=category_id,
        )
        categories = await self._categories.list()
        logger.debug("Aggregating %d transactions locally", len(transactions))
        return self._aggregator.build(
            transactions,
            start,
            end,
            interval=interval,
            account_id=account_id,
            category_id=category_id,
            categories=categories,
        )
