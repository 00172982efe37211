"""Derived financial metrics.

Pure, total functions: none of them raise for any numeric input, and
none of them depend on the order of the transactions they receive.
Amounts are handled as Decimal; ints and floats are accepted and
converted through their string form so that ``0.1`` stays ``0.1``.
Non-finite inputs (NaN, infinity) count as zero.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional, Protocol, Union

from fintrack.domain.finance.entities.transaction import TransactionType
from fintrack.domain.finance.value_objects import BudgetStatus, BudgetUtilization
from fintrack.domain.shared.periods import bucket_end, bucket_start
from fintrack.domain.shared.time import today_utc

if TYPE_CHECKING:
    from fintrack.domain.finance.entities.budget import Budget

Number = Union[Decimal, int, float]

ZERO = Decimal("0")
HUNDRED = Decimal("100")

WARNING_THRESHOLD = Decimal("75")
DANGER_THRESHOLD = Decimal("90")


class _Posting(Protocol):
    type: TransactionType
    amount: Decimal


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        result = Decimal(value)
    return result if result.is_finite() else ZERO


def _clamp_percentage(value: Decimal) -> Decimal:
    return max(ZERO, min(HUNDRED, value))


# -----------------------------------------------------------------------------
# Budgets
# -----------------------------------------------------------------------------


def budget_raw_percentage(spent: Number, amount: Number) -> Decimal:
    """Unclamped spent/amount ratio in percent (0 when amount <= 0)."""
    amount_ = to_decimal(amount)
    if amount_ <= 0:
        return ZERO
    return to_decimal(spent) / amount_ * HUNDRED


def budget_percentage(spent: Number, amount: Number) -> Decimal:
    """Share of the budget used, clamped to [0, 100]."""
    return _clamp_percentage(budget_raw_percentage(spent, amount))


def budget_status(percentage: Number, raw_percentage: Optional[Number] = None) -> BudgetStatus:
    raw = to_decimal(percentage if raw_percentage is None else raw_percentage)
    if raw > HUNDRED:
        return BudgetStatus.EXCEEDED
    pct = to_decimal(percentage)
    if pct >= DANGER_THRESHOLD:
        return BudgetStatus.DANGER
    if pct >= WARNING_THRESHOLD:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def budget_utilization(spent: Number, amount: Number) -> BudgetUtilization:
    spent_ = to_decimal(spent)
    amount_ = to_decimal(amount)
    percentage = budget_percentage(spent_, amount_)
    raw = budget_raw_percentage(spent_, amount_)
    return BudgetUtilization(
        spent=spent_,
        amount=amount_,
        percentage=percentage,
        raw_percentage=raw,
        remaining=amount_ - spent_,
        status=budget_status(percentage, raw),
    )


def budget_window(budget: Budget, today: Optional[date] = None) -> tuple[date, date]:
    """Return the inclusive date window of the budget's current period.

    The window is the calendar bucket (day, ISO week, month or year)
    containing ``today``, narrowed to the budget's own start and end dates.
    """
    today = today or today_utc()
    start = max(bucket_start(today, budget.period), budget.start_date)
    end = bucket_end(bucket_start(today, budget.period), budget.period)
    if budget.end_date is not None:
        end = min(end, budget.end_date)
    return start, end


def budget_spent(
    budget: Budget,
    transactions: Iterable,
    today: Optional[date] = None,
) -> Decimal:
    """Sum the expenses that count against ``budget`` in its current window.

    A budget without a category is an overall budget and counts every
    expense.
    """
    start, end = budget_window(budget, today)
    return sum(
        (
            to_decimal(t.amount)
            for t in transactions
            if t.type == TransactionType.EXPENSE
            and start <= t.transaction_date <= end
            and (budget.category_id is None or t.category_id == budget.category_id)
        ),
        ZERO,
    )


# -----------------------------------------------------------------------------
# Goals
# -----------------------------------------------------------------------------


def goal_progress(current: Number, target: Number) -> Decimal:
    """Progress towards a goal in percent, clamped to [0, 100]."""
    target_ = to_decimal(target)
    if target_ <= 0:
        return ZERO
    return _clamp_percentage(to_decimal(current) / target_ * HUNDRED)


def goal_remaining(current: Number, target: Number) -> Decimal:
    return max(ZERO, to_decimal(target) - to_decimal(current))


def goal_days_remaining(deadline: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Days until the deadline; negative when overdue, None without deadline."""
    if deadline is None:
        return None
    return (deadline - (today or today_utc())).days


# -----------------------------------------------------------------------------
# Income and expenses
# -----------------------------------------------------------------------------


def _sum_of_type(transactions: Iterable[_Posting], kind: TransactionType) -> Decimal:
    return sum((to_decimal(t.amount) for t in transactions if t.type == kind), ZERO)


def total_income(transactions: Iterable[_Posting]) -> Decimal:
    return _sum_of_type(transactions, TransactionType.INCOME)


def total_expense(transactions: Iterable[_Posting]) -> Decimal:
    return _sum_of_type(transactions, TransactionType.EXPENSE)


def net_income(transactions: Iterable[_Posting]) -> Decimal:
    """Income minus expenses; transfers count towards neither."""
    transactions = list(transactions)
    return total_income(transactions) - total_expense(transactions)
