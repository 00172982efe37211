"""Goal reads and writes, contributions and withdrawals."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Mapping, Union

from fintrack.application.cache import QueryKey, ResourceFamily
from fintrack.application.mutations import MutationAction, MutationCoordinator
from fintrack.application.ports import GoalPort
from fintrack.application.validation import (
    ContributeForm,
    GoalForm,
    GoalUpdateForm,
    validate_form,
)
from fintrack.domain.finance.entities import Goal

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory


class GoalService:
    def __init__(self, gateway: GoalPort, coordinator: MutationCoordinator):
        self._gateway = gateway
        self._coordinator = coordinator
        self._cache = coordinator.cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> GoalService:
        return cls(gateway=factory.goal_gateway(), coordinator=factory.coordinator)

    async def list(self) -> list[Goal]:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.GOALS),
            lambda _key: self._gateway.list(),
        )

    async def get(self, goal_id: int) -> Goal:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.GOALS, id=goal_id),
            lambda _key: self._gateway.get(goal_id),
        )

    async def create(self, data: Mapping[str, Any]) -> Goal:
        form = validate_form(GoalForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.CREATE_GOAL,
            lambda: self._gateway.create(form.to_payload()),
        )

    async def update(self, goal_id: int, data: Mapping[str, Any]) -> Goal:
        form = validate_form(GoalUpdateForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.UPDATE_GOAL,
            lambda: self._gateway.update(goal_id, form.to_payload()),
        )

    async def delete(self, goal_id: int) -> None:
        await self._coordinator.execute(
            MutationAction.DELETE_GOAL,
            lambda: self._gateway.delete(goal_id),
        )

    async def contribute(self, goal_id: int, amount: Union[Decimal, float, str]) -> Goal:
        form = validate_form(ContributeForm, {"amount": amount}).unwrap()
        return await self._coordinator.execute(
            MutationAction.CONTRIBUTE_GOAL,
            lambda: self._gateway.contribute(goal_id, form.to_payload()),
        )

    async def withdraw(self, goal_id: int, amount: Union[Decimal, float, str]) -> Goal:
        form = validate_form(ContributeForm, {"amount": amount}).unwrap()
        return await self._coordinator.execute(
            MutationAction.WITHDRAW_GOAL,
            lambda: self._gateway.withdraw(goal_id, form.to_payload()),
        )
