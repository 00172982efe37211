"""Cache keys for server-fetched resources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ResourceFamily(str, Enum):
    """Resource collections that can be invalidated as a whole."""

    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
    BUDGETS = "budgets"
    GOALS = "goals"
    CATEGORIES = "categories"
    DASHBOARD = "dashboard"
    REPORTS = "reports"


def _freeze(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    return value


@dataclass(frozen=True)
class QueryKey:
    """Identity of one cached value.

    A key belongs to a resource family (``transactions``) and may carry
    parameters (``account_id=3, page=2``). Variants with different
    parameters are cached separately but are invalidated together
    through their family.
    """

    family: str
    params: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def of(cls, family: Union[ResourceFamily, str], **params: Any) -> QueryKey:
        """Build a key, dropping unset (None) parameters."""
        name = family.value if isinstance(family, ResourceFamily) else str(family)
        frozen = tuple(
            sorted((k, _freeze(v)) for k, v in params.items() if v is not None),
        )
        return cls(family=name, params=frozen)

    def param(self, name: str, default: Any = None) -> Any:
        return dict(self.params).get(name, default)

    def __str__(self) -> str:
        if not self.params:
            return self.family
        rendered = ", ".join(f"{k}={v}" for k, v in self.params)
        return f"{self.family}[{rendered}]"
