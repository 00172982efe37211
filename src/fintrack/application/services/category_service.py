"""Category reads and writes with the hierarchy guard."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

from fintrack.application.cache import QueryKey, ResourceFamily
from fintrack.application.mutations import MutationAction, MutationCoordinator
from fintrack.application.ports import CategoryPort
from fintrack.application.validation import (
    CategoryForm,
    CategoryUpdateForm,
    validate_form,
)
from fintrack.domain.finance.entities import Category, CategoryType
from fintrack.domain.finance.services import CategoryHierarchyService

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory


class CategoryService:
    def __init__(self, gateway: CategoryPort, coordinator: MutationCoordinator):
        self._gateway = gateway
        self._coordinator = coordinator
        self._cache = coordinator.cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> CategoryService:
        return cls(gateway=factory.category_gateway(), coordinator=factory.coordinator)

    async def list(self, type: Optional[CategoryType] = None) -> list[Category]:  # NOQA: A002
        return await self._cache.read(
            QueryKey.of(ResourceFamily.CATEGORIES, type=type),
            lambda _key: self._gateway.list(type),
        )

    async def get(self, category_id: int) -> Category:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.CATEGORIES, id=category_id),
            lambda _key: self._gateway.get(category_id),
        )

    async def hierarchy(self) -> CategoryHierarchyService:
        return CategoryHierarchyService(await self.list())

    async def create(self, data: Mapping[str, Any]) -> Category:
        form = validate_form(CategoryForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.CREATE_CATEGORY,
            lambda: self._gateway.create(form.to_payload()),
        )

    async def update(self, category_id: int, data: Mapping[str, Any]) -> Category:
        """Update a category.

        Raises CategoryCycleError, without calling the server, when the
        new parent is the category itself or one of its descendants.
        """
        form = validate_form(CategoryUpdateForm, data).unwrap()
        if form.parent_id is not None:
            hierarchy = await self.hierarchy()
            hierarchy.validate_parent(category_id, form.parent_id)

        return await self._coordinator.execute(
            MutationAction.UPDATE_CATEGORY,
            lambda: self._gateway.update(category_id, form.to_payload()),
        )

    async def delete(self, category_id: int) -> None:
        await self._coordinator.execute(
            MutationAction.DELETE_CATEGORY,
            lambda: self._gateway.delete(category_id),
        )
