"""Account reads and writes."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping

from fintrack.application.cache import QueryKey, ResourceFamily
from fintrack.application.mutations import MutationAction, MutationCoordinator
from fintrack.application.ports import AccountPort
from fintrack.application.validation import (
    AccountForm,
    AccountUpdateForm,
    validate_form,
)
from fintrack.domain.finance.entities import Account
from fintrack.domain.finance.services import metrics

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory


class AccountService:
    def __init__(self, gateway: AccountPort, coordinator: MutationCoordinator):
        self._gateway = gateway
        self._coordinator = coordinator
        self._cache = coordinator.cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> AccountService:
        return cls(gateway=factory.account_gateway(), coordinator=factory.coordinator)

    async def list(self) -> list[Account]:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.ACCOUNTS),
            lambda _key: self._gateway.list(),
        )

    async def get(self, account_id: int) -> Account:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.ACCOUNTS, id=account_id),
            lambda _key: self._gateway.get(account_id),
        )

    async def total_balance(self) -> Decimal:
        """Sum of the balances of all active accounts."""
        accounts = await self.list()
        return sum(
            (metrics.to_decimal(a.balance) for a in accounts if a.is_active),
            metrics.ZERO,
        )

    async def create(self, data: Mapping[str, Any]) -> Account:
        form = validate_form(AccountForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.CREATE_ACCOUNT,
            lambda: self._gateway.create(form.to_payload()),
        )

    async def update(self, account_id: int, data: Mapping[str, Any]) -> Account:
        form = validate_form(AccountUpdateForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.UPDATE_ACCOUNT,
            lambda: self._gateway.update(account_id, form.to_payload()),
        )

    async def delete(self, account_id: int) -> None:
        await self._coordinator.execute(
            MutationAction.DELETE_ACCOUNT,
            lambda: self._gateway.delete(account_id),
        )

    async def toggle_active(self, account_id: int) -> Account:
        return await self._coordinator.execute(
            MutationAction.TOGGLE_ACCOUNT,
            lambda: self._gateway.toggle_active(account_id),
        )
