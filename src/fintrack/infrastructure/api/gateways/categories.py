"""Category endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fintrack.application.ports import CategoryPort
from fintrack.domain.finance.entities import Category, CategoryType
from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models


class CategoryGateway(CategoryPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self, type: Optional[CategoryType] = None) -> list[Category]:  # NOQA: A002
        params = {"type": CategoryType(type).value} if type else None
        data = await self._client.get_data("/categories", params=params)
        return parse_models(Category, data)

    async def get(self, category_id: int) -> Category:
        data = await self._client.get_data(f"/categories/{category_id}")
        return parse_model(Category, data)

    async def create(self, payload: dict[str, Any]) -> Category:
        data = await self._client.post_data("/categories", json=payload)
        return parse_model(Category, data)

    async def update(self, category_id: int, payload: dict[str, Any]) -> Category:
        data = await self._client.put_data(f"/categories/{category_id}", json=payload)
        return parse_model(Category, data)

    async def delete(self, category_id: int) -> None:
        await self._client.delete(f"/categories/{category_id}")
