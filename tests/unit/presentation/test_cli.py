"""Tests for the Typer CLI against a fake finance API."""

import httpx
import pytest
from typer.testing import CliRunner

from fintrack.infrastructure.api import ApiClient
from fintrack.presentation.cli import app as cli_module
from fintrack.session import FinanceSession
from tests.shared.fixtures import TestTransactionFactory, TestUserFactory

runner = CliRunner()


def _transaction(transaction_id, type_, amount, day, category_id):
    payload = TestTransactionFactory.payload(transaction_id, amount)
    payload.update(
        {"type": type_, "transaction_date": day, "category_id": category_id},
    )
    return payload


ROUTES = {
    "/accounts": {
        "data": [
            {"id": 1, "name": "Main", "type": "checking", "balance": "1500.00"},
            {"id": 2, "name": "Visa", "type": "credit", "balance": "-250.00"},
        ],
    },
    "/categories": {
        "data": [
            {"id": 1, "name": "Food", "type": "expense"},
            {"id": 2, "name": "Groceries", "type": "expense", "parent_id": 1},
            {"id": 5, "name": "Salary", "type": "income"},
        ],
    },
    "/budgets": {
        "data": [
            {
                "id": 1,
                "category_id": 2,
                "amount": 200,
                "period": "monthly",
                "start_date": "2024-01-01",
                "category": {"id": 2, "name": "Groceries", "type": "expense"},
                "utilization": {"spent": 250, "percentage": 100, "remaining": -50},
            },
        ],
    },
    "/goals": {
        "data": [
            {"id": 1, "name": "Vacation", "target_amount": 1000, "current_amount": 250},
        ],
    },
    "/dashboard": {
        "data": {
            "total_balance": 1250,
            "total_income": 500,
            "total_expenses": 150,
            "net_income": 350,
        },
    },
    "/transactions": {
        "data": [
            _transaction(1, "expense", 100, "2024-01-05", 2),
            _transaction(2, "expense", 50, "2024-01-10", 1),
            _transaction(3, "income", 500, "2024-01-15", 5),
        ],
        "meta": {"current_page": 1, "last_page": 1, "per_page": 100, "total": 3},
    },
}


def handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path.removeprefix("/api")
    if path == "/v1/login":
        return httpx.Response(
            200,
            json={"data": {"user": TestUserFactory.payload(), "token": "fresh-token"}},
        )
    if path == "/transactions/export":
        return httpx.Response(200, content=b"id,amount\n1,100\n")
    if path in ROUTES:
        return httpx.Response(200, json=ROUTES[path])
    return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def opened(monkeypatch):
    """Route the CLI to the fake API; records every opened session."""
    sessions: list[FinanceSession] = []

    def _open_session() -> FinanceSession:
        client = ApiClient(
            "http://finance.test/api",
            token=TestUserFactory.TOKEN,
            transport=httpx.MockTransport(handler),
        )
        session = FinanceSession(client, refetch=False)
        sessions.append(session)
        return session

    monkeypatch.setattr(cli_module, "_open_session", _open_session)
    monkeypatch.setattr(cli_module, "_configure_logging", lambda: None)
    return sessions


class TestListings:
    """Listing commands."""

    def test_accounts(self, opened):
        result = runner.invoke(cli_module.app, ["accounts"])

        assert result.exit_code == 0, result.output
        assert "Main" in result.output
        assert "1,250.00" in result.output

    def test_categories_tree(self, opened):
        result = runner.invoke(cli_module.app, ["categories"])

        assert result.exit_code == 0, result.output
        output = result.output
        assert output.index("Food") < output.index("Groceries") < output.index("Salary")

    def test_budgets_show_over_budget_ratio(self, opened):
        result = runner.invoke(cli_module.app, ["budgets"])

        assert result.exit_code == 0, result.output
        assert "100.0%" in result.output
        assert "exceeded" in result.output

    def test_goals(self, opened):
        result = runner.invoke(cli_module.app, ["goals"])

        assert result.exit_code == 0, result.output
        assert "Vacation" in result.output
        assert "25.0%" in result.output

    def test_summary(self, opened):
        result = runner.invoke(cli_module.app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "350.00" in result.output


class TestReports:
    """Report and export commands."""

    def test_report(self, opened, tmp_path):
        target = tmp_path / "report.xlsx"

        result = runner.invoke(
            cli_module.app,
            [
                "report",
                "--start",
                "2024-01-01",
                "--end",
                "2024-01-31",
                "--xlsx",
                str(target),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "350.00" in result.output
        assert "January 2024" in result.output
        assert target.read_bytes()[:2] == b"PK"

    def test_reversed_range_fails_without_a_session(self, opened):
        result = runner.invoke(
            cli_module.app,
            ["report", "--start", "2024-02-01", "--end", "2024-01-01"],
        )

        assert result.exit_code == 1
        assert "Error" in result.output
        assert opened == []

    def test_export_transactions(self, opened, tmp_path):
        target = tmp_path / "tx.csv"

        result = runner.invoke(
            cli_module.app,
            [
                "export",
                "transactions",
                "--start",
                "2024-01-01",
                "--end",
                "2024-01-31",
                "--output",
                str(target),
            ],
        )

        assert result.exit_code == 0, result.output
        assert target.read_bytes() == b"id,amount\n1,100\n"

    def test_export_refuses_to_overwrite(self, opened, tmp_path):
        target = tmp_path / "tx.csv"
        target.write_bytes(b"keep me")

        result = runner.invoke(cli_module.app, ["export", "transactions", "-o", str(target)])

        assert result.exit_code == 1
        assert target.read_bytes() == b"keep me"

    def test_export_rejects_pdf_for_transactions(self, opened):
        result = runner.invoke(cli_module.app, ["export", "transactions", "--format", "pdf"])

        assert result.exit_code == 1
        assert opened == []


class TestErrors:
    """Error rendering."""

    def test_missing_resource_exits_with_message(self, opened, monkeypatch):
        monkeypatch.delitem(ROUTES, "/goals")

        result = runner.invoke(cli_module.app, ["goals"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unreadable_response_exits_with_message(self, opened, monkeypatch):
        monkeypatch.setitem(ROUTES, "/dashboard", {"data": {"total_balance": "abc"}})

        result = runner.invoke(cli_module.app, ["summary"])

        assert result.exit_code == 1
        assert "could not be read" in result.output

    def test_login_prints_token(self, opened):
        result = runner.invoke(
            cli_module.app,
            ["login", "--email", "test@example.com", "--password", "secret"],
        )

        assert result.exit_code == 0, result.output
        assert "fresh-token" in result.output
