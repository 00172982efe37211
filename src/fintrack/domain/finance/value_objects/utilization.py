"""Budget utilization value object."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class BudgetStatus(str, Enum):
    """Severity of a budget's spending, used for badges and colors."""

    OK = "ok"
    WARNING = "warning"  # 75% or more used
    DANGER = "danger"  # 90% or more used
    EXCEEDED = "exceeded"  # Spent more than the budget amount


@dataclass(frozen=True)
class BudgetUtilization:
    """Spent-to-date against a budget ceiling.

    ``percentage`` is clamped to 0-100 for progress bars, while
    ``raw_percentage`` keeps the unclamped ratio for over-budget displays.
    ``remaining`` is negative when the budget is exceeded.
    """

    spent: Decimal
    amount: Decimal
    percentage: Decimal
    raw_percentage: Decimal
    remaining: Decimal
    status: BudgetStatus

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0

    @property
    def overspent(self) -> Decimal:
        return max(Decimal("0"), -self.remaining)
