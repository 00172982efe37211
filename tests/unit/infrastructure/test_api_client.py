"""Tests for ApiClient using an in-process httpx transport."""

import httpx
import pytest

from fintrack.domain.shared.exceptions import (
    ErrorCode,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from fintrack.infrastructure.api import ApiClient, unwrap_envelope

BASE_URL = "http://finance.test/api"


def make_client(handler, token=None, on_unauthorized=None) -> ApiClient:
    return ApiClient(
        base_url=BASE_URL,
        token=token,
        on_unauthorized=on_unauthorized,
        transport=httpx.MockTransport(handler),
    )


class TestUnwrapEnvelope:
    """Tests for unwrap_envelope."""

    def test_envelope(self):
        assert unwrap_envelope({"success": True, "message": "ok", "data": [1]}) == [1]

    def test_paginated_body_is_kept(self):
        body = {"data": [1], "meta": {"current_page": 1}}

        assert unwrap_envelope(body) is body

    def test_plain_body(self):
        assert unwrap_envelope([1, 2]) == [1, 2]


class TestApiClientRequests:
    """Successful requests."""

    @pytest.mark.asyncio
    async def test_get_data_unwraps_and_sends_bearer(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True, "data": {"id": 1}})

        client = make_client(handler, token="abc")

        assert await client.get_data("/accounts") == {"id": 1}
        assert seen["url"] == f"{BASE_URL}/accounts"
        assert seen["auth"] == "Bearer abc"
        await client.close()

    @pytest.mark.asyncio
    async def test_no_bearer_without_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"data": []})

        client = make_client(handler)
        await client.get_data("/goals")

        assert seen["auth"] is None
        assert not client.is_authenticated
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_response_body(self):
        client = make_client(lambda request: httpx.Response(204))

        assert await client.post_data("/v1/logout") is None
        await client.delete("/goals/1")
        await client.close()

    @pytest.mark.asyncio
    async def test_get_bytes(self):
        client = make_client(
            lambda request: httpx.Response(
                200,
                content=b"id,amount\n1,10\n",
                headers={"Content-Type": "text/csv"},
            ),
        )

        assert await client.get_bytes("/transactions/export") == b"id,amount\n1,10\n"
        await client.close()

    @pytest.mark.asyncio
    async def test_multipart_upload_sets_its_own_content_type(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content_type"] = request.headers["Content-Type"]
            seen["body"] = request.read()
            return httpx.Response(200, json={"data": {"imported": 2}})

        client = make_client(handler, token="abc")
        result = await client.post_data(
            "/transactions/import",
            files={"file": ("march.csv", b"a,b\n1,2\n", "text/csv")},
        )

        assert result == {"imported": 2}
        assert seen["content_type"].startswith("multipart/form-data; boundary=")
        assert b'filename="march.csv"' in seen["body"]
        await client.close()


class TestApiClientErrors:
    """Error translation."""

    @pytest.mark.asyncio
    async def test_unauthorized_clears_token_and_runs_hook(self):
        calls = []
        client = make_client(
            lambda request: httpx.Response(401, json={"message": "Unauthenticated."}),
            token="abc",
            on_unauthorized=lambda: calls.append("signed out"),
        )

        with pytest.raises(UnauthorizedError) as exc_info:
            await client.get_data("/accounts")

        assert exc_info.value.code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401
        assert client.token is None
        assert calls == ["signed out"]
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = make_client(
            lambda request: httpx.Response(404, json={"message": "Goal not found"}),
        )

        with pytest.raises(NotFoundError) as exc_info:
            await client.get_data("/goals/99")

        assert exc_info.value.message == "Goal not found"
        assert exc_info.value.code == ErrorCode.ENTITY_NOT_FOUND
        await client.close()

    @pytest.mark.asyncio
    async def test_validation_errors_from_server(self):
        client = make_client(
            lambda request: httpx.Response(
                422,
                json={
                    "message": "The given data was invalid.",
                    "errors": {"amount": ["The amount must be at least 0.01."], "name": "Taken"},
                },
            ),
        )

        with pytest.raises(ServerError) as exc_info:
            await client.post_data("/transactions", json={"amount": 0})

        error = exc_info.value
        assert error.status_code == 422
        assert error.field_errors == {
            "amount": ["The amount must be at least 0.01."],
            "name": ["Taken"],
        }
        await client.close()

    @pytest.mark.asyncio
    async def test_server_error_without_json_body(self):
        client = make_client(lambda request: httpx.Response(500, text="<html>oops</html>"))

        with pytest.raises(ServerError) as exc_info:
            await client.get_data("/dashboard")

        assert exc_info.value.message == "Request failed with status 500"
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError) as exc_info:
            await client.get_data("/accounts")

        assert exc_info.value.message == "Could not reach the server"
        assert exc_info.value.status_code is None
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError, match="did not respond in time"):
            await client.get_data("/accounts")
        await client.close()

    @pytest.mark.asyncio
    async def test_nothing_is_retried(self):
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(503)

        client = make_client(handler)

        with pytest.raises(ServerError):
            await client.get_data("/accounts")

        assert calls["count"] == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_malformed_json_on_success(self):
        client = make_client(lambda request: httpx.Response(200, text="{not json"))

        with pytest.raises(InvalidResponseError) as exc_info:
            await client.get_data("/dashboard")

        assert isinstance(exc_info.value, ServerError)
        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE
        assert exc_info.value.status_code == 200
        assert exc_info.value.details == {"path": "/dashboard", "method": "GET"}
        await client.close()
