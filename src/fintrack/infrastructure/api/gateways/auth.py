"""Authentication endpoints."""

from __future__ import annotations

from fintrack.application.ports import AuthPort
from fintrack.domain.finance.entities import AuthResponse, User
from fintrack.infrastructure.api.client import ApiClient, parse_model


class AuthGateway(AuthPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def login(self, email: str, password: str) -> AuthResponse:
        data = await self._client.post_data(
            "/v1/login",
            json={"email": email, "password": password},
        )
        return parse_model(AuthResponse, data)

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        password_confirmation: str,
    ) -> AuthResponse:
        data = await self._client.post_data(
            "/v1/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password_confirmation,
            },
        )
        return parse_model(AuthResponse, data)

    async def logout(self) -> None:
        await self._client.post_data("/v1/logout")

    async def me(self) -> User:
        data = await self._client.get_data("/v1/me")
        return parse_model(User, data)
