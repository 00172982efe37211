from fintrack.domain.finance.value_objects.utilization import (
    BudgetStatus,
    BudgetUtilization,
)

__all__ = [
    "BudgetStatus",
    "BudgetUtilization",
]
