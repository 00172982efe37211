"""Mutating actions and the resource families each one makes stale."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from fintrack.application.cache.query_key import ResourceFamily

_F = ResourceFamily


class MutationAction(str, Enum):
    """Every write the client can perform against the server."""

    CREATE_ACCOUNT = "create_account"
    UPDATE_ACCOUNT = "update_account"
    DELETE_ACCOUNT = "delete_account"
    TOGGLE_ACCOUNT = "toggle_account"

    CREATE_TRANSACTION = "create_transaction"
    UPDATE_TRANSACTION = "update_transaction"
    DELETE_TRANSACTION = "delete_transaction"
    IMPORT_TRANSACTIONS = "import_transactions"

    CREATE_BUDGET = "create_budget"
    UPDATE_BUDGET = "update_budget"
    DELETE_BUDGET = "delete_budget"
    TOGGLE_BUDGET = "toggle_budget"

    CREATE_CATEGORY = "create_category"
    UPDATE_CATEGORY = "update_category"
    DELETE_CATEGORY = "delete_category"

    CREATE_GOAL = "create_goal"
    UPDATE_GOAL = "update_goal"
    DELETE_GOAL = "delete_goal"
    CONTRIBUTE_GOAL = "contribute_goal"
    WITHDRAW_GOAL = "withdraw_goal"


_ACCOUNT = (_F.ACCOUNTS, _F.DASHBOARD)
_TRANSACTION = (_F.TRANSACTIONS, _F.ACCOUNTS, _F.DASHBOARD, _F.BUDGETS)
_BUDGET = (_F.BUDGETS, _F.DASHBOARD)
_CATEGORY = (_F.CATEGORIES, _F.TRANSACTIONS, _F.BUDGETS)
_GOAL = (_F.GOALS, _F.DASHBOARD)

INVALIDATION_RULES: Mapping[MutationAction, tuple[ResourceFamily, ...]] = MappingProxyType(
    {
        MutationAction.CREATE_ACCOUNT: _ACCOUNT,
        MutationAction.UPDATE_ACCOUNT: _ACCOUNT,
        MutationAction.TOGGLE_ACCOUNT: _ACCOUNT,
        # Deleting an account removes its transactions server-side
        MutationAction.DELETE_ACCOUNT: (_F.ACCOUNTS, _F.DASHBOARD, _F.TRANSACTIONS),
        MutationAction.CREATE_TRANSACTION: _TRANSACTION,
        MutationAction.UPDATE_TRANSACTION: _TRANSACTION,
        MutationAction.DELETE_TRANSACTION: _TRANSACTION,
        MutationAction.IMPORT_TRANSACTIONS: (_F.TRANSACTIONS, _F.ACCOUNTS, _F.DASHBOARD),
        MutationAction.CREATE_BUDGET: _BUDGET,
        MutationAction.UPDATE_BUDGET: _BUDGET,
        MutationAction.DELETE_BUDGET: _BUDGET,
        MutationAction.TOGGLE_BUDGET: _BUDGET,
        MutationAction.CREATE_CATEGORY: _CATEGORY,
        MutationAction.UPDATE_CATEGORY: _CATEGORY,
        MutationAction.DELETE_CATEGORY: _CATEGORY,
        MutationAction.CREATE_GOAL: _GOAL,
        MutationAction.UPDATE_GOAL: _GOAL,
        MutationAction.DELETE_GOAL: _GOAL,
        MutationAction.CONTRIBUTE_GOAL: _GOAL,
        MutationAction.WITHDRAW_GOAL: _GOAL,
    },
)


def families_for(action: MutationAction) -> tuple[ResourceFamily, ...]:
    """Return the resource families invalidated after ``action`` succeeds."""
    return INVALIDATION_RULES[MutationAction(action)]
