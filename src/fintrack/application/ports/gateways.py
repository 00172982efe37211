"""Gateway ports for the remote finance API.

The application layer talks to the server only through these
interfaces, so services can be exercised with in-memory fakes and stay
independent of the HTTP client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, BinaryIO, Optional, Union

from fintrack.domain.finance.entities import (
    Account,
    AuthResponse,
    Budget,
    Category,
    CategoryReport,
    CategoryType,
    DashboardSummary,
    Goal,
    IncomeExpenseSummary,
    Transaction,
    TransactionFilters,
    TransactionPage,
    TrendData,
    User,
)
from fintrack.domain.shared.periods import Interval

Payload = dict[str, Any]


class AccountPort(ABC):
    @abstractmethod
    async def list(self) -> list[Account]: ...

    @abstractmethod
    async def get(self, account_id: int) -> Account: ...

    @abstractmethod
    async def create(self, payload: Payload) -> Account: ...

    @abstractmethod
    async def update(self, account_id: int, payload: Payload) -> Account: ...

    @abstractmethod
    async def delete(self, account_id: int) -> None: ...

    @abstractmethod
    async def toggle_active(self, account_id: int) -> Account: ...


class CategoryPort(ABC):
    @abstractmethod
    async def list(self, type: Optional[CategoryType] = None) -> list[Category]: ...  # NOQA: A002

    @abstractmethod
    async def get(self, category_id: int) -> Category: ...

    @abstractmethod
    async def create(self, payload: Payload) -> Category: ...

    @abstractmethod
    async def update(self, category_id: int, payload: Payload) -> Category: ...

    @abstractmethod
    async def delete(self, category_id: int) -> None: ...


class TransactionPort(ABC):
    @abstractmethod
    async def list(self, filters: Optional[TransactionFilters] = None) -> TransactionPage:
        """Return one page of the listing."""

    @abstractmethod
    async def list_all(
        self,
        filters: Optional[TransactionFilters] = None,
    ) -> list[Transaction]:
        """Return every transaction matching ``filters`` across all pages."""

    @abstractmethod
    async def get(self, transaction_id: int) -> Transaction: ...

    @abstractmethod
    async def create(self, payload: Payload) -> Transaction: ...

    @abstractmethod
    async def update(self, transaction_id: int, payload: Payload) -> Transaction: ...

    @abstractmethod
    async def delete(self, transaction_id: int) -> None: ...

    @abstractmethod
    async def import_csv(
        self,
        content: Union[bytes, BinaryIO],
        filename: str = "transactions.csv",
    ) -> Any: ...

    @abstractmethod
    async def export_csv(self, filters: Optional[TransactionFilters] = None) -> bytes: ...


class BudgetPort(ABC):
    @abstractmethod
    async def list(self) -> list[Budget]: ...

    @abstractmethod
    async def get(self, budget_id: int) -> Budget: ...

    @abstractmethod
    async def create(self, payload: Payload) -> Budget: ...

    @abstractmethod
    async def update(self, budget_id: int, payload: Payload) -> Budget: ...

    @abstractmethod
    async def delete(self, budget_id: int) -> None: ...

    @abstractmethod
    async def toggle_active(self, budget_id: int) -> Budget: ...


class GoalPort(ABC):
    @abstractmethod
    async def list(self) -> list[Goal]: ...

    @abstractmethod
    async def get(self, goal_id: int) -> Goal: ...

    @abstractmethod
    async def create(self, payload: Payload) -> Goal: ...

    @abstractmethod
    async def update(self, goal_id: int, payload: Payload) -> Goal: ...

    @abstractmethod
    async def delete(self, goal_id: int) -> None: ...

    @abstractmethod
    async def contribute(self, goal_id: int, payload: Payload) -> Goal: ...

    @abstractmethod
    async def withdraw(self, goal_id: int, payload: Payload) -> Goal: ...


class DashboardPort(ABC):
    @abstractmethod
    async def summary(self) -> DashboardSummary: ...


class ReportPort(ABC):
    @abstractmethod
    async def income_expense(self, start: date, end: date) -> IncomeExpenseSummary: ...

    @abstractmethod
    async def by_category(self, start: date, end: date) -> list[CategoryReport]: ...

    @abstractmethod
    async def trends(
        self,
        start: date,
        end: date,
        interval: Interval = Interval.DAILY,
    ) -> list[TrendData]: ...

    @abstractmethod
    async def export(self, fmt: str, start: date, end: date, **filters: Any) -> bytes:
        """Download the report rendered server-side as CSV or PDF."""


class AuthPort(ABC):
    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResponse: ...

    @abstractmethod
    async def register(
        self,
        name: str,
        email: str,
        password: str,
        password_confirmation: str,
    ) -> AuthResponse: ...

    @abstractmethod
    async def logout(self) -> None: ...

    @abstractmethod
    async def me(self) -> User: ...
