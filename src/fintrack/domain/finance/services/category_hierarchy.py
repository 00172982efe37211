"""Category hierarchy domain service."""

from __future__ import annotations

from typing import Iterable, Optional

from fintrack.domain.finance.entities.category import Category
from fintrack.domain.finance.exceptions import CategoryCycleError


class CategoryHierarchyService:
    """Validate parent-child relationships between categories.

    Works on a snapshot of the user's categories. Nested ``children``
    are flattened so either a flat or a tree-shaped listing can be given.
    """

    def __init__(self, categories: Iterable[Category]):
        self._parents: dict[int, Optional[int]] = {}
        for category in categories:
            self._index(category)

    def _index(self, category: Category) -> None:
        self._parents[category.id] = category.parent_id
        for child in category.children:
            self._index(child)

    def validate_parent(self, category_id: int, new_parent_id: Optional[int]) -> None:
        """Raise CategoryCycleError if the assignment would create a cycle."""
        if new_parent_id is None:
            return
        if self.would_create_cycle(category_id, new_parent_id):
            raise CategoryCycleError(category_id, new_parent_id)

    def would_create_cycle(self, category_id: int, new_parent_id: int) -> bool:
        visited: set[int] = {category_id}
        current_id: Optional[int] = new_parent_id

        while current_id is not None:
            if current_id in visited:
                return True
            visited.add(current_id)
            current_id = self._parents.get(current_id)

        return False

    def depth(self, category_id: int) -> int:
        """Number of ancestors above ``category_id`` (0 for a root)."""
        depth = 0
        seen: set[int] = {category_id}
        current_id = self._parents.get(category_id)
        while current_id is not None and current_id not in seen:
            seen.add(current_id)
            depth += 1
            current_id = self._parents.get(current_id)
        return depth
