"""Tests for the HTTP gateways against a fake finance API."""

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from fintrack.domain.finance.entities import CategoryType, TransactionFilters
from fintrack.domain.shared.exceptions import InvalidResponseError
from fintrack.domain.shared.periods import Interval
from fintrack.infrastructure.api import (
    AccountGateway,
    ApiClient,
    AuthGateway,
    CategoryGateway,
    DashboardGateway,
    GoalGateway,
    ReportGateway,
    TransactionGateway,
)
from tests.shared.fixtures import TestTransactionFactory, TestUserFactory


class FakeFinanceApi:
    """Records requests and answers from a route table."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], object] = {}

    def on(self, method: str, path: str, response) -> None:
        self.routes[(method, f"/api{path}")] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def envelope(data) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "message": "OK", "data": data})


@pytest.fixture
def api() -> FakeFinanceApi:
    return FakeFinanceApi()


@pytest_asyncio.fixture
async def client(api):
    client = ApiClient("http://finance.test/api", token="abc", transport=httpx.MockTransport(api))
    yield client
    await client.close()


class TestAccountGateway:
    """Tests for AccountGateway."""

    @pytest.mark.asyncio
    async def test_list(self, api, client):
        api.on(
            "GET",
            "/accounts",
            envelope([{"id": 1, "name": "Main", "type": "checking", "balance": "120.50"}]),
        )

        accounts = await AccountGateway(client).list()

        assert accounts[0].balance == Decimal("120.50")

    @pytest.mark.asyncio
    async def test_toggle_uses_patch(self, api, client):
        api.on(
            "PATCH",
            "/accounts/1/toggle-active",
            envelope({"id": 1, "name": "Main", "type": "checking", "is_active": False}),
        )

        account = await AccountGateway(client).toggle_active(1)

        assert account.is_active is False
        assert api.last.method == "PATCH"


class TestCategoryGateway:
    """Tests for CategoryGateway."""

    @pytest.mark.asyncio
    async def test_list_filters_by_type(self, api, client):
        api.on("GET", "/categories", envelope([{"id": 5, "name": "Salary", "type": "income"}]))

        categories = await CategoryGateway(client).list(CategoryType.INCOME)

        assert categories[0].type == CategoryType.INCOME
        assert api.last.url.params["type"] == "income"


class TestTransactionGateway:
    """Tests for TransactionGateway."""

    @pytest.mark.asyncio
    async def test_list_keeps_pagination_meta(self, api, client):
        api.on(
            "GET",
            "/transactions",
            httpx.Response(
                200,
                json={
                    "data": [TestTransactionFactory.payload()],
                    "meta": {"current_page": 1, "last_page": 2, "per_page": 15, "total": 16},
                },
            ),
        )

        page = await TransactionGateway(client).list(TransactionFilters(account_id=1))

        assert page.meta.total == 16
        assert page.has_next
        assert api.last.url.params["account_id"] == "1"

    @pytest.mark.asyncio
    async def test_list_all_walks_every_page(self, api, client):
        def pages(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            return httpx.Response(
                200,
                json={
                    "data": [TestTransactionFactory.payload(transaction_id=page)],
                    "meta": {"current_page": page, "last_page": 3, "per_page": 100, "total": 3},
                },
            )

        api.on("GET", "/transactions", pages)

        transactions = await TransactionGateway(client).list_all(
            TransactionFilters(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)),
        )

        assert [t.id for t in transactions] == [1, 2, 3]
        assert len(api.requests) == 3
        assert api.last.url.params["per_page"] == "100"
        assert api.last.url.params["start_date"] == "2024-01-01"

    @pytest.mark.asyncio
    async def test_create_sends_json(self, api, client):
        api.on("POST", "/transactions", envelope(TestTransactionFactory.payload(7)))

        created = await TransactionGateway(client).create({"amount": 42.5, "type": "expense"})

        assert created.id == 7
        assert json.loads(api.last.content) == {"amount": 42.5, "type": "expense"}

    @pytest.mark.asyncio
    async def test_import_csv_as_multipart(self, api, client):
        api.on("POST", "/transactions/import", envelope({"imported": 2, "failed": 0}))

        result = await TransactionGateway(client).import_csv(b"date,amount\n", "jan.csv")

        assert result == {"imported": 2, "failed": 0}
        assert api.last.headers["Content-Type"].startswith("multipart/form-data")


class TestGoalGateway:
    """Tests for GoalGateway."""

    @pytest.mark.asyncio
    async def test_contribute(self, api, client):
        api.on(
            "POST",
            "/goals/3/contribute",
            envelope({"id": 3, "name": "Car", "target_amount": 5000, "current_amount": 1100}),
        )

        goal = await GoalGateway(client).contribute(3, {"amount": 100.0})

        assert goal.current_amount == Decimal("1100")
        assert json.loads(api.last.content) == {"amount": 100.0}


class TestReportGateway:
    """Tests for ReportGateway."""

    @pytest.mark.asyncio
    async def test_trends_params(self, api, client):
        api.on(
            "GET",
            "/reports/trends",
            envelope([{"date": "2024-01", "income": 500, "expense": 150, "balance": 350}]),
        )

        trends = await ReportGateway(client).trends(
            date(2024, 1, 1),
            date(2024, 3, 31),
            Interval.MONTHLY,
        )

        assert trends[0].balance == Decimal("350")
        params = api.last.url.params
        assert params["start_date"] == "2024-01-01"
        assert params["end_date"] == "2024-03-31"
        assert params["interval"] == "monthly"

    @pytest.mark.asyncio
    async def test_export_pdf(self, api, client):
        api.on("GET", "/reports/export", httpx.Response(200, content=b"%PDF-1.4"))

        content = await ReportGateway(client).export(
            "pdf",
            date(2024, 1, 1),
            date(2024, 1, 31),
            account_id=None,
        )

        assert content == b"%PDF-1.4"
        assert api.last.url.params["type"] == "pdf"
        assert "account_id" not in api.last.url.params


class TestAuthGateway:
    """Tests for AuthGateway."""

    @pytest.mark.asyncio
    async def test_login(self, api, client):
        api.on(
            "POST",
            "/v1/login",
            envelope({"user": TestUserFactory.payload(), "token": TestUserFactory.TOKEN}),
        )

        response = await AuthGateway(client).login("test@example.com", "secret")

        assert response.token == TestUserFactory.TOKEN
        assert response.user.email == TestUserFactory.DEFAULT_EMAIL
        assert json.loads(api.last.content) == {
            "email": "test@example.com",
            "password": "secret",
        }


class TestMalformedPayloads:
    """Bodies that do not match the expected shape."""

    @pytest.mark.asyncio
    async def test_unparseable_summary(self, api, client):
        api.on("GET", "/dashboard", envelope({"total_balance": "abc"}))

        with pytest.raises(InvalidResponseError) as exc_info:
            await DashboardGateway(client).summary()

        assert exc_info.value.details["model"] == "DashboardSummary"
        assert exc_info.value.details["errors"][0]["loc"] == ("total_balance",)

    @pytest.mark.asyncio
    async def test_object_where_a_list_is_expected(self, api, client):
        api.on("GET", "/accounts", envelope({"id": 1, "name": "Main"}))

        with pytest.raises(InvalidResponseError):
            await AccountGateway(client).list()

    @pytest.mark.asyncio
    async def test_bad_item_in_list(self, api, client):
        api.on("GET", "/goals", envelope([{"id": 1, "name": "Trip", "target_amount": []}]))

        with pytest.raises(InvalidResponseError):
            await GoalGateway(client).list()
