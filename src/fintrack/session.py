"""Per-user session: one HTTP client, one cache, all services.

A session owns the cache for exactly one authenticated user. Logging out,
or any unauthorized response from the server, drops the credential and
every cached value; nothing is shared between sessions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from fintrack.application.cache import RemoteDataCache, ResourceFamily
from fintrack.application.mutations import MutationCoordinator
from fintrack.application.services import (
    AccountService,
    BudgetService,
    CategoryService,
    DashboardRefresher,
    DashboardService,
    GoalService,
    ReportService,
    TransactionService,
)
from fintrack.application.services.dashboard_refresher import (
    DEFAULT_INTERVAL_SECONDS,
    SummaryListener,
)
from fintrack.domain.finance.entities import User
from fintrack.infrastructure.api import ApiClient, ApiGatewayFactory
from fintrack_config import Settings, get_settings

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class FinanceSession:
    """Entry point for everything a signed-in user can do."""

    def __init__(
        self,
        client: ApiClient,
        cache: Optional[RemoteDataCache] = None,
        refresh_interval: float = DEFAULT_INTERVAL_SECONDS,
        refetch: bool = True,
    ):
        self._client = client
        self._cache = cache or RemoteDataCache()
        self._coordinator = MutationCoordinator(self._cache, refetch=refetch)
        self._factory = ApiGatewayFactory(client, self._cache, self._coordinator)
        self._refresh_interval = refresh_interval
        self._user: Optional[User] = None
        self._auth = self._factory.auth_gateway()

        client.set_unauthorized_hook(self._handle_unauthorized)

        self.accounts = AccountService.from_factory(self._factory)
        self.categories = CategoryService.from_factory(self._factory)
        self.transactions = TransactionService.from_factory(self._factory)
        self.budgets = BudgetService.from_factory(self._factory)
        self.goals = GoalService.from_factory(self._factory)
        self.dashboard = DashboardService.from_factory(self._factory)
        self.reports = ReportService.from_factory(self._factory)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> FinanceSession:
        settings = settings or get_settings()
        client = ApiClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            token=settings.token_value,
            transport=transport,
        )
        cache = RemoteDataCache(
            stale_after={
                ResourceFamily.CATEGORIES: settings.categories_stale_seconds,
                ResourceFamily.REPORTS: settings.reports_stale_seconds,
            },
        )
        return cls(
            client=client,
            cache=cache,
            refresh_interval=settings.dashboard_refresh_seconds,
        )

    @property
    def cache(self) -> RemoteDataCache:
        return self._cache

    @property
    def coordinator(self) -> MutationCoordinator:
        return self._coordinator

    @property
    def client(self) -> ApiClient:
        return self._client

    @property
    def is_authenticated(self) -> bool:
        return self._client.is_authenticated

    @property
    def user(self) -> Optional[User]:
        return self._user

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def login(self, email: str, password: str) -> User:
        response = await self._auth.login(email, password)
        self._start(response.token, response.user)
        return response.user

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        password_confirmation: str,
    ) -> User:
        response = await self._auth.register(name, email, password, password_confirmation)
        self._start(response.token, response.user)
        return response.user

    async def logout(self) -> None:
        """Sign out; local state is dropped even if the server call fails."""
        try:
            if self.is_authenticated:
                await self._auth.logout()
        finally:
            self._end()

    async def current_user(self) -> User:
        if self._user is None:
            self._user = await self._auth.me()
        return self._user

    def _start(self, token: str, user: User) -> None:
        self._cache.clear()
        self._client.set_token(token)
        self._user = user
        logger.info("Signed in as %s", user.email)

    def _end(self) -> None:
        self._client.set_token(None)
        self._user = None
        self._cache.clear()

    def _handle_unauthorized(self) -> None:
        logger.warning("Server rejected the session credential, signing out")
        self._end()

    # -------------------------------------------------------------------------
    # Lifetime
    # -------------------------------------------------------------------------

    def dashboard_refresher(
        self,
        interval: Optional[float] = None,
        on_update: Optional[SummaryListener] = None,
    ) -> DashboardRefresher:
        return DashboardRefresher(
            self.dashboard,
            interval=interval if interval is not None else self._refresh_interval,
            on_update=on_update,
        )

    async def aclose(self) -> None:
        self._cache.clear()
        await self._client.close()

    async def __aenter__(self) -> FinanceSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
