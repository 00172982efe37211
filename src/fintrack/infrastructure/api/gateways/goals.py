"""Goal endpoints, including contributions and withdrawals."""

from __future__ import annotations

from typing import Any

from fintrack.application.ports import GoalPort
from fintrack.domain.finance.entities import Goal
from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models


class GoalGateway(GoalPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Goal]:
        data = await self._client.get_data("/goals")
        return parse_models(Goal, data)

    async def get(self, goal_id: int) -> Goal:
        data = await self._client.get_data(f"/goals/{goal_id}")
        return parse_model(Goal, data)

    async def create(self, payload: dict[str, Any]) -> Goal:
        data = await self._client.post_data("/goals", json=payload)
        return parse_model(Goal, data)

    async def update(self, goal_id: int, payload: dict[str, Any]) -> Goal:
        data = await self._client.put_data(f"/goals/{goal_id}", json=payload)
        return parse_model(Goal, data)

    async def delete(self, goal_id: int) -> None:
        await self._client.delete(f"/goals/{goal_id}")

    async def contribute(self, goal_id: int, payload: dict[str, Any]) -> Goal:
        data = await self._client.post_data(f"/goals/{goal_id}/contribute", json=payload)
        return parse_model(Goal, data)

    async def withdraw(self, goal_id: int, payload: dict[str, Any]) -> Goal:
        data = await self._client.post_data(f"/goals/{goal_id}/withdraw", json=payload)
        return parse_model(Goal, data)
