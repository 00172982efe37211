"""Tests for the derived financial metrics."""

from datetime import date
from decimal import Decimal

import pytest

from fintrack.domain.finance.services import metrics
from fintrack.domain.finance.value_objects import BudgetStatus
from tests.shared.fixtures import TestBudgetFactory, TestTransactionFactory

TX = TestTransactionFactory


class TestBudgetPercentage:
    """Tests for budget_percentage and budget_raw_percentage."""

    def test_within_budget(self):
        assert metrics.budget_percentage(50, 200) == Decimal("25")

    def test_clamped_when_over_budget(self):
        """Spending 250 of 200 shows 100% while the raw ratio stays 125%."""
        assert metrics.budget_percentage(250, 200) == Decimal("100")
        assert metrics.budget_raw_percentage(250, 200) == Decimal("125")

    @pytest.mark.parametrize("amount", [0, -10, Decimal("0")])
    def test_zero_or_negative_amount_is_zero(self, amount):
        assert metrics.budget_percentage(100, amount) == Decimal("0")
        assert metrics.budget_raw_percentage(100, amount) == Decimal("0")

    def test_negative_spent_does_not_raise(self):
        assert metrics.budget_percentage(-50, 200) == Decimal("0")

    @pytest.mark.parametrize(
        ("spent", "amount"),
        [(0, 1), (1, 3), (999, 1000), (10**9, 1), (-5, 5), (Decimal("0.1"), Decimal("0.3"))],
    )
    def test_always_within_bounds(self, spent, amount):
        assert Decimal("0") <= metrics.budget_percentage(spent, amount) <= Decimal("100")

    def test_floats_are_converted_through_their_string_form(self):
        assert metrics.to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize(
        ("spent", "amount"),
        [
            (float("nan"), 100),
            (50, float("nan")),
            (float("inf"), float("inf")),
            (Decimal("NaN"), Decimal("100")),
            (float("-inf"), 100),
        ],
    )
    def test_non_finite_inputs_count_as_zero(self, spent, amount):
        assert metrics.budget_percentage(spent, amount) == Decimal("0")
        assert metrics.goal_progress(spent, amount) == Decimal("0")
        raw = metrics.budget_raw_percentage(spent, amount)
        assert metrics.budget_status(raw) == BudgetStatus.OK


class TestBudgetUtilization:
    """Tests for budget_utilization and budget_status."""

    def test_over_budget_scenario(self):
        usage = metrics.budget_utilization(250, 200)

        assert usage.percentage == Decimal("100")
        assert usage.raw_percentage == Decimal("125")
        assert usage.remaining == Decimal("-50")
        assert usage.is_over_budget
        assert usage.overspent == Decimal("50")
        assert usage.status == BudgetStatus.EXCEEDED

    @pytest.mark.parametrize(
        ("spent", "status"),
        [
            (0, BudgetStatus.OK),
            (149, BudgetStatus.OK),
            (150, BudgetStatus.WARNING),
            (180, BudgetStatus.DANGER),
            (200, BudgetStatus.DANGER),
            (201, BudgetStatus.EXCEEDED),
        ],
    )
    def test_status_thresholds(self, spent, status):
        assert metrics.budget_utilization(spent, 200).status == status

    def test_exactly_spent_is_not_over_budget(self):
        usage = metrics.budget_utilization(200, 200)

        assert not usage.is_over_budget
        assert usage.overspent == Decimal("0")


class TestBudgetSpent:
    """Tests for budget_window and budget_spent."""

    def test_monthly_window_contains_today(self):
        budget = TestBudgetFactory.monthly()

        start, end = metrics.budget_window(budget, today=date(2024, 2, 14))

        assert start == date(2024, 2, 1)
        assert end == date(2024, 2, 29)

    def test_window_starts_no_earlier_than_budget(self):
        budget = TestBudgetFactory.monthly(start_date=date(2024, 2, 10))

        start, _ = metrics.budget_window(budget, today=date(2024, 2, 14))

        assert start == date(2024, 2, 10)

    def test_counts_only_matching_expenses_in_window(self):
        budget = TestBudgetFactory.monthly(category_id=2)
        transactions = [
            TX.expense("100", date(2024, 3, 1), category_id=2),
            TX.expense("50", date(2024, 3, 31), category_id=2),
            TX.expense("70", date(2024, 3, 15), category_id=3),  # Other category
            TX.expense("80", date(2024, 2, 29), category_id=2),  # Previous month
            TX.income("500", date(2024, 3, 10), category_id=2),
        ]

        spent = metrics.budget_spent(budget, transactions, today=date(2024, 3, 20))

        assert spent == Decimal("150")

    def test_overall_budget_counts_every_expense(self):
        budget = TestBudgetFactory.monthly(category_id=None)
        transactions = [
            TX.expense("100", date(2024, 3, 1), category_id=2),
            TX.expense("70", date(2024, 3, 15), category_id=3),
            TX.transfer("999", date(2024, 3, 15)),
        ]

        assert metrics.budget_spent(budget, transactions, today=date(2024, 3, 20)) == Decimal(
            "170",
        )

    def test_usage_falls_back_to_server_spent(self):
        budget = TestBudgetFactory.monthly(amount="200", spent="250")

        usage = budget.usage()

        assert usage.percentage == Decimal("100")
        assert usage.raw_percentage == Decimal("125")


class TestGoalMetrics:
    """Tests for goal progress, remaining and deadline helpers."""

    def test_progress(self):
        assert metrics.goal_progress(250, 1000) == Decimal("25")

    def test_progress_clamped_at_100(self):
        assert metrics.goal_progress(1500, 1000) == Decimal("100")

    @pytest.mark.parametrize("target", [0, -100])
    def test_non_positive_target_is_zero(self, target):
        assert metrics.goal_progress(100, target) == Decimal("0")

    def test_progress_is_monotonic_in_current(self):
        values = [metrics.goal_progress(current, 300) for current in range(0, 600, 25)]

        assert values == sorted(values)
        assert values[-1] == Decimal("100")

    def test_remaining_never_negative(self):
        assert metrics.goal_remaining(250, 1000) == Decimal("750")
        assert metrics.goal_remaining(1500, 1000) == Decimal("0")

    def test_days_remaining(self):
        assert metrics.goal_days_remaining(date(2024, 1, 31), today=date(2024, 1, 1)) == 30
        assert metrics.goal_days_remaining(date(2024, 1, 1), today=date(2024, 1, 3)) == -2
        assert metrics.goal_days_remaining(None) is None


class TestIncomeAndExpenseTotals:
    """Tests for total_income, total_expense and net_income."""

    @pytest.fixture
    def transactions(self):
        return [
            TX.expense("100", date(2024, 1, 5), category_id=1),
            TX.expense("50", date(2024, 1, 10), category_id=2),
            TX.income("500", date(2024, 1, 15), category_id=3),
            TX.transfer("1000", date(2024, 1, 20)),
        ]

    def test_totals(self, transactions):
        assert metrics.total_expense(transactions) == Decimal("150")
        assert metrics.total_income(transactions) == Decimal("500")
        assert metrics.net_income(transactions) == Decimal("350")

    def test_order_does_not_matter(self, transactions):
        assert metrics.net_income(reversed(transactions)) == metrics.net_income(transactions)

    def test_empty_is_zero(self):
        assert metrics.total_income([]) == Decimal("0")
        assert metrics.total_expense([]) == Decimal("0")
        assert metrics.net_income([]) == Decimal("0")

    def test_net_income_accepts_a_generator(self, transactions):
        assert metrics.net_income(t for t in transactions) == Decimal("350")
