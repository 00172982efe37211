"""Account endpoints."""

from __future__ import annotations

from typing import Any

from fintrack.application.ports import AccountPort
from fintrack.domain.finance.entities import Account
from fintrack.infrastructure.api.client import ApiClient, parse_model, parse_models


class AccountGateway(AccountPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Account]:
        data = await self._client.get_data("/accounts")
        return parse_models(Account, data)

    async def get(self, account_id: int) -> Account:
        data = await self._client.get_data(f"/accounts/{account_id}")
        return parse_model(Account, data)

    async def create(self, payload: dict[str, Any]) -> Account:
        data = await self._client.post_data("/accounts", json=payload)
        return parse_model(Account, data)

    async def update(self, account_id: int, payload: dict[str, Any]) -> Account:
        data = await self._client.put_data(f"/accounts/{account_id}", json=payload)
        return parse_model(Account, data)

    async def delete(self, account_id: int) -> None:
        await self._client.delete(f"/accounts/{account_id}")

    async def toggle_active(self, account_id: int) -> Account:
        data = await self._client.patch_data(f"/accounts/{account_id}/toggle-active")
        return parse_model(Account, data)
