"""Server-side reporting endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from fintrack.application.ports import ReportPort
from fintrack.domain.finance.entities import (
    CategoryReport,
    IncomeExpenseSummary,
    TrendData,
)
from fintrack.domain.shared.periods import Interval
from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models

ExportFormat = Literal["csv", "pdf"]


def _range(start: date, end: date) -> dict[str, str]:
    return {"start_date": start.isoformat(), "end_date": end.isoformat()}


class ReportGateway(ReportPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def income_expense(self, start: date, end: date) -> IncomeExpenseSummary:
        data = await self._client.get_data("/reports/income-expense", params=_range(start, end))
        return parse_model(IncomeExpenseSummary, data)

    async def by_category(self, start: date, end: date) -> list[CategoryReport]:
        data = await self._client.get_data("/reports/by-category", params=_range(start, end))
        return parse_models(CategoryReport, data)

    async def trends(
        self,
        start: date,
        end: date,
        interval: Interval = Interval.DAILY,
    ) -> list[TrendData]:
        params = {**_range(start, end), "interval": Interval(interval).value}
        data = await self._client.get_data("/reports/trends", params=params)
        return parse_models(TrendData, data)

    async def export(
        self,
        fmt: ExportFormat,
        start: date,
        end: date,
        **filters: Any,
    ) -> bytes:
        params: dict[str, Any] = {"type": fmt, **_range(start, end)}
        params.update({k: v for k, v in filters.items() if v is not None})
        return await self._client.get_bytes("/reports/export", params=params)
