"""Aggregate raw transactions into income/expense reports.

Aggregation happens in Python over the transactions of the requested
range: totals, per-category breakdowns and a bucketed trend series.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from fintrack.application.dtos import (
    CategoryBreakdown,
    CategoryBreakdownItem,
    IncomeExpenseReport,
    TrendPoint,
)
from fintrack.domain.finance.entities import Category, Transaction, TransactionType
from fintrack.domain.finance.services import metrics
from fintrack.domain.shared.periods import (
    Interval,
    bucket_key,
    bucket_label,
    bucket_start,
    ensure_valid_range,
    iter_buckets,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


def _category_name(
    transaction: Transaction,
    names: dict[int, str],
) -> str:
    if transaction.category_id is None:
        return UNCATEGORIZED
    if transaction.category_id in names:
        return names[transaction.category_id]
    if transaction.category_name:
        return transaction.category_name
    return f"Category #{transaction.category_id}"


def _name_index(categories: Optional[Iterable[Category]]) -> dict[int, str]:
    names: dict[int, str] = {}

    def _walk(category: Category) -> None:
        names[category.id] = category.name
        for child in category.children:
            _walk(child)

    for category in categories or ():
        _walk(category)
    return names


class ReportAggregator:
    """Build reports for an inclusive date range ``[start, end]``.

    Every entry point raises InvalidRangeError when ``start > end``,
    before touching the transactions.
    """

    def build(  # NOQA: PLR0913
        self,
        transactions: Iterable[Transaction],
        start: date,
        end: date,
        *,
        interval: Interval = Interval.MONTHLY,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> IncomeExpenseReport:
        ensure_valid_range(start, end)
        interval = Interval(interval)
        selected = self._select(transactions, start, end, account_id, category_id)
        names = _name_index(categories)

        breakdown = self._breakdown(selected, names)
        income = metrics.total_income(selected)
        expense = metrics.total_expense(selected)

        logger.debug(
            "Built report %s..%s (%s): %d transactions",
            start,
            end,
            interval.value,
            len(selected),
        )

        return IncomeExpenseReport(
            start=start,
            end=end,
            interval=interval,
            total_income=income,
            total_expense=expense,
            net_income=income - expense,
            income_by_category=breakdown.income,
            expense_by_category=breakdown.expense,
            trend=self._trend(selected, start, end, interval),
            transaction_count=len(selected),
        )

    def breakdown(
        self,
        transactions: Iterable[Transaction],
        start: date,
        end: date,
        *,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> CategoryBreakdown:
        ensure_valid_range(start, end)
        selected = self._select(transactions, start, end, account_id, category_id)
        return self._breakdown(selected, _name_index(categories))

    def trend(
        self,
        transactions: Iterable[Transaction],
        start: date,
        end: date,
        *,
        interval: Interval = Interval.MONTHLY,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> list[TrendPoint]:
        ensure_valid_range(start, end)
        selected = self._select(transactions, start, end, account_id, category_id)
        return self._trend(selected, start, end, Interval(interval))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _select(
        self,
        transactions: Iterable[Transaction],
        start: date,
        end: date,
        account_id: Optional[int],
        category_id: Optional[int],
    ) -> list[Transaction]:
        return [
            t
            for t in transactions
            if start <= t.transaction_date <= end
            and (account_id is None or t.account_id == account_id)
            and (category_id is None or t.category_id == category_id)
        ]

    def _breakdown(
        self,
        transactions: list[Transaction],
        names: dict[int, str],
    ) -> CategoryBreakdown:
        return CategoryBreakdown(
            income=self._items_for(transactions, TransactionType.INCOME, names),
            expense=self._items_for(transactions, TransactionType.EXPENSE, names),
        )

    def _items_for(
        self,
        transactions: list[Transaction],
        kind: TransactionType,
        names: dict[int, str],
    ) -> list[CategoryBreakdownItem]:
        amounts: dict[Optional[int], Decimal] = defaultdict(Decimal)
        counts: dict[Optional[int], int] = defaultdict(int)
        labels: dict[Optional[int], str] = {}

        for t in transactions:
            if t.type != kind:
                continue
            amounts[t.category_id] += metrics.to_decimal(t.amount)
            counts[t.category_id] += 1
            labels.setdefault(t.category_id, _category_name(t, names))

        total = sum(amounts.values(), metrics.ZERO)

        items = [
            CategoryBreakdownItem(
                category_id=key,
                category_name=labels[key],
                amount=amount,
                transaction_count=counts[key],
                percentage=(amount / total * metrics.HUNDRED) if total > 0 else metrics.ZERO,
            )
            for key, amount in amounts.items()
        ]
        items.sort(
            key=lambda item: (
                -item.amount,
                item.category_name,
                item.category_id if item.category_id is not None else -1,
            ),
        )
        return items

    def _trend(
        self,
        transactions: list[Transaction],
        start: date,
        end: date,
        interval: Interval,
    ) -> list[TrendPoint]:
        points: dict[date, TrendPoint] = {
            bucket: TrendPoint(
                period=bucket_key(bucket, interval),
                period_label=bucket_label(bucket, interval),
                start=bucket,
            )
            for bucket in iter_buckets(start, end, interval)
        }

        for t in transactions:
            point = points[bucket_start(t.transaction_date, interval)]
            if t.type == TransactionType.INCOME:
                point.income += metrics.to_decimal(t.amount)
            elif t.type == TransactionType.EXPENSE:
                point.expense += metrics.to_decimal(t.amount)

        for point in points.values():
            point.net = point.income - point.expense

        return list(points.values())
