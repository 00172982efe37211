"""HTTP client for the finance REST API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, NoReturn, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fintrack.domain.shared.exceptions import (
    FieldErrors,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

UnauthorizedHook = Callable[[], None]
M = TypeVar("M", bound=BaseModel)


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _field_errors(body: Mapping[str, Any]) -> FieldErrors:
    errors = body.get("errors")
    if not isinstance(errors, dict):
        return {}
    return {
        str(field): [str(m) for m in (messages if isinstance(messages, list) else [messages])]
        for field, messages in errors.items()
    }


def unwrap_envelope(body: Any) -> Any:
    """Return the ``data`` member of a ``{success, message, data}`` envelope.

    Paginated bodies (``{data, meta}``) and anything that is not an
    envelope are returned unchanged.
    """
    if isinstance(body, dict) and "data" in body and "meta" not in body:
        return body["data"]
    return body


def parse_model(model: type[M], data: Any) -> M:
    """Validate a response payload into ``model``.

    Raises
    ------
    InvalidResponseError
        If the payload does not match the model
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.warning("Unexpected %s payload from the API: %s", model.__name__, e)
        raise InvalidResponseError(
            details={
                "model": model.__name__,
                "errors": e.errors(include_url=False, include_input=False),
            },
        ) from e


def parse_models(model: type[M], data: Any) -> list[M]:
    """Validate a list payload; a missing payload is an empty list."""
    if not data:
        return []
    if not isinstance(data, list):
        logger.warning("Expected a list of %s, got %s", model.__name__, type(data).__name__)
        raise InvalidResponseError(details={"model": model.__name__})
    return [parse_model(model, item) for item in data]


class ApiClient:
    """HTTP client wrapper for the finance API.

    Every request carries the bearer token when one is set. Failures are
    translated into the client's error hierarchy; nothing is retried.
    """

    def __init__(  # NOQA: PLR0913
        self,
        base_url: str,
        timeout: float = 30.0,
        token: Optional[str] = None,
        on_unauthorized: Optional[UnauthorizedHook] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._token = token
        self._on_unauthorized = on_unauthorized
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def set_unauthorized_hook(self, hook: Optional[UnauthorizedHook]) -> None:
        self._on_unauthorized = hook

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # No default Content-Type: multipart uploads set their own
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Core request
    # -------------------------------------------------------------------------

    async def request(  # NOQA: PLR0913
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Any = None,
    ) -> httpx.Response:
        """Send a request and return the successful response.

        Raises
        ------
        NetworkError
            If no response arrived (timeout, connection failure)
        UnauthorizedError
            On 401; the unauthorized hook runs first
        NotFoundError
            On 404
        ServerError
            On any other 4xx/5xx, with the server's field errors
        """
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        client = await self._get_client()
        try:
            response = await client.request(
                method,
                path,
                params=params,
                json=json,
                files=files,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning("API timeout on %s %s: %s", method, path, e)
            msg = "The server did not respond in time"
            raise NetworkError(msg, details={"path": path}) from e
        except httpx.TransportError as e:
            logger.warning("API connection failed on %s %s: %s", method, path, e)
            msg = "Could not reach the server"
            raise NetworkError(msg, details={"path": path}) from e

        if not response.is_success:
            self._raise_for_status(method, path, response)
        return response

    def _raise_for_status(
        self,
        method: str,
        path: str,
        response: httpx.Response,
    ) -> NoReturn:
        status = response.status_code
        body = _error_body(response)
        message = body.get("message") or f"Request failed with status {status}"

        logger.warning(
            "API returned error %d on %s %s: %s",
            status,
            method,
            path,
            response.text[:200] if response.text else "no body",
        )

        if status == httpx.codes.UNAUTHORIZED:
            self._token = None
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise UnauthorizedError
        if status == httpx.codes.NOT_FOUND:
            raise NotFoundError(message, resource=path)
        raise ServerError(
            message,
            status_code=status,
            field_errors=_field_errors(body),
            details={"path": path, "method": method},
        )

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    def _json(self, method: str, path: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.warning("API returned malformed JSON on %s %s: %s", method, path, e)
            raise InvalidResponseError(
                status_code=response.status_code,
                details={"path": path, "method": method},
            ) from e

    async def get_data(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        response = await self.request("GET", path, params=params)
        return unwrap_envelope(self._json("GET", path, response))

    async def post_data(self, path: str, json: Any = None, files: Any = None) -> Any:
        response = await self.request("POST", path, json=json, files=files)
        return unwrap_envelope(self._json("POST", path, response)) if response.content else None

    async def put_data(self, path: str, json: Any = None) -> Any:
        response = await self.request("PUT", path, json=json)
        return unwrap_envelope(self._json("PUT", path, response)) if response.content else None

    async def patch_data(self, path: str, json: Any = None) -> Any:
        response = await self.request("PATCH", path, json=json)
        return unwrap_envelope(self._json("PATCH", path, response)) if response.content else None

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path)

    async def get_page(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """GET a paginated listing and return ``{data, meta}`` intact."""
        response = await self.request("GET", path, params=params)
        return self._json("GET", path, response)

    async def get_bytes(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """GET a binary download (CSV/PDF export)."""
        response = await self.request("GET", path, params=params)
        return response.content
