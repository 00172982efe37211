"""Budget endpoints."""

from __future__ import annotations

from typing import Any

from fintrack.application.ports import BudgetPort
from fintrack.domain.finance.entities import Budget
from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models


class BudgetGateway(BudgetPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Budget]:
        data = await self._client.get_data("/budgets")
        return parse_models(Budget, data)

    async def get(self, budget_id: int) -> Budget:
        data = await self._client.get_data(f"/budgets/{budget_id}")
        return parse_model(Budget, data)

    async def create(self, payload: dict[str, Any]) -> Budget:
        data = await self._client.post_data("/budgets", json=payload)
        return parse_model(Budget, data)

    async def update(self, budget_id: int, payload: dict[str, Any]) -> Budget:
        data = await self._client.put_data(f"/budgets/{budget_id}", json=payload)
        return parse_model(Budget, data)

    async def delete(self, budget_id: int) -> None:
        await self._client.delete(f"/budgets/{budget_id}")

    async def toggle_active(self, budget_id: int) -> Budget:
        data = await self._client.patch_data(f"/budgets/{budget_id}/toggle-active")
        return parse_model(Budget, data)
