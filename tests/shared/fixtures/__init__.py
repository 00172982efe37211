"""Shared test fixtures and factories."""

from tests.shared.fixtures.factories import (
    TestAccountFactory,
    TestBudgetFactory,
    TestCategoryFactory,
    TestGoalFactory,
    TestTransactionFactory,
    TestUserFactory,
)

__all__ = [
    "TestAccountFactory",
    "TestBudgetFactory",
    "TestCategoryFactory",
    "TestGoalFactory",
    "TestTransactionFactory",
    "TestUserFactory",
]
