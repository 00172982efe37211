"""Periodic refresh of the dashboard summary.

The refresher is a task with an explicit lifetime: ``start()`` when the
dashboard becomes visible, ``stop()`` when it goes away (or use it as an
async context manager). It never outlives its consumer.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from fintrack.application.services.dashboard_service import DashboardService
from fintrack.domain.finance.entities import DashboardSummary
from fintrack.domain.shared.exceptions import FintrackError, UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 300.0

SummaryListener = Callable[[DashboardSummary], None]


class DashboardRefresher:
    """Re-fetch the dashboard summary on a fixed interval.

    Failed refreshes are logged and the loop keeps going, except for an
    unauthorized response, which ends the session and therefore the loop.
    """

    def __init__(
        self,
        dashboard: DashboardService,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        on_update: Optional[SummaryListener] = None,
    ):
        if interval <= 0:
            msg = f"Refresh interval must be positive, got {interval}"
            raise ValueError(msg)
        self._dashboard = dashboard
        self._interval = interval
        self._on_update = on_update
        self._task: Optional[asyncio.Task] = None
        self._ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def ticks(self) -> int:
        """Number of completed refresh attempts."""
        return self._ticks

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="dashboard-refresher")
        logger.debug("Dashboard refresher started (every %.0fs)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Dashboard refresher stopped after %d ticks", self._ticks)

    async def refresh_once(self) -> Optional[DashboardSummary]:
        """Run one refresh; returns None when it failed."""
        try:
            summary = await self._dashboard.refresh()
        except UnauthorizedError:
            raise
        except FintrackError as e:
            logger.warning("Dashboard refresh failed: %s", e)
            return None
        finally:
            self._ticks += 1

        if self._on_update is not None:
            self._on_update(summary)
        return summary

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.refresh_once()
            except UnauthorizedError:
                logger.info("Session expired, stopping dashboard refresher")
                return

    async def __aenter__(self) -> DashboardRefresher:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
