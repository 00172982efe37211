"""Budget reads, writes and utilization."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from fintrack.application.cache import QueryKey, ResourceFamily
from fintrack.application.mutations import MutationAction, MutationCoordinator
from fintrack.application.ports import BudgetPort
from fintrack.application.validation import (
    BudgetForm,
    BudgetUpdateForm,
    validate_form,
)
from fintrack.domain.finance.entities import Budget, Transaction
from fintrack.domain.finance.value_objects import BudgetUtilization

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory


class BudgetService:
    def __init__(self, gateway: BudgetPort, coordinator: MutationCoordinator):
        self._gateway = gateway
        self._coordinator = coordinator
        self._cache = coordinator.cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> BudgetService:
        return cls(gateway=factory.budget_gateway(), coordinator=factory.coordinator)

    async def list(self) -> list[Budget]:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.BUDGETS),
            lambda _key: self._gateway.list(),
        )

    async def get(self, budget_id: int) -> Budget:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.BUDGETS, id=budget_id),
            lambda _key: self._gateway.get(budget_id),
        )

    async def overview(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        today: Optional[date] = None,
        include_inactive: bool = False,
    ) -> list[tuple[Budget, BudgetUtilization]]:
        """Pair every budget with its utilization.

        Spending comes from ``transactions`` when given, otherwise from the
        figures the server reported with the budget.
        """
        budgets = await self.list()
        snapshot = list(transactions) if transactions is not None else None
        return [
            (budget, budget.usage(snapshot, today))
            for budget in budgets
            if include_inactive or budget.is_active
        ]

    async def create(self, data: Mapping[str, Any]) -> Budget:
        form = validate_form(BudgetForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.CREATE_BUDGET,
            lambda: self._gateway.create(form.to_payload()),
        )

    async def update(self, budget_id: int, data: Mapping[str, Any]) -> Budget:
        form = validate_form(BudgetUpdateForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.UPDATE_BUDGET,
            lambda: self._gateway.update(budget_id, form.to_payload()),
        )

    async def delete(self, budget_id: int) -> None:
        await self._coordinator.execute(
            MutationAction.DELETE_BUDGET,
            lambda: self._gateway.delete(budget_id),
        )

    async def toggle_active(self, budget_id: int) -> Budget:
        return await self._coordinator.execute(
            MutationAction.TOGGLE_BUDGET,
            lambda: self._gateway.toggle_active(budget_id),
        )
