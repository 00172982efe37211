"""Tests for entity parsing and derived properties."""

from datetime import date
from decimal import Decimal

from fintrack.domain.finance.entities import (
    Goal,
    Transaction,
    TransactionFilters,
    TransactionPage,
    TransactionType,
)
from tests.shared.fixtures import TestGoalFactory, TestTransactionFactory


class TestTransaction:
    """Tests for the Transaction entity."""

    def test_parses_timestamp_dates(self):
        transaction = Transaction.model_validate(TestTransactionFactory.payload())

        assert transaction.transaction_date == date(2024, 3, 5)
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.amount == Decimal("42.5")

    def test_filters_drop_unset_values(self):
        filters = TransactionFilters(account_id=3, start_date=date(2024, 1, 1))

        assert filters.as_params() == {"account_id": 3, "start_date": "2024-01-01"}

    def test_page_meta_accepts_from_alias(self):
        page = TransactionPage.model_validate(
            {
                "data": [TestTransactionFactory.payload()],
                "meta": {"current_page": 1, "last_page": 3, "per_page": 1, "total": 3, "from": 1},
            },
        )

        assert page.meta.from_ == 1
        assert page.has_next


class TestGoal:
    """Tests for the Goal entity."""

    def test_progress_and_remaining(self):
        goal = TestGoalFactory.vacation(current="250", target="1000")

        assert goal.progress == Decimal("25")
        assert goal.remaining == Decimal("750")
        assert not goal.is_reached

    def test_overfunded_goal(self):
        goal = TestGoalFactory.vacation(current="1200", target="1000")

        assert goal.progress == Decimal("100")
        assert goal.remaining == Decimal("0")
        assert goal.is_reached

    def test_server_strings_are_parsed_as_decimals(self):
        goal = Goal.model_validate(
            {"id": 1, "name": "Car", "target_amount": "5000.00", "current_amount": "1250.50"},
        )

        assert goal.current_amount == Decimal("1250.50")
        assert goal.days_remaining() is None
