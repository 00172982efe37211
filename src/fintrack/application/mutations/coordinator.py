"""Run writes and invalidate the cache afterwards."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Mapping, Optional, TypeVar

from fintrack.application.cache import RemoteDataCache, ResourceFamily
from fintrack.application.mutations.actions import INVALIDATION_RULES, MutationAction

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MutationCoordinator:
    """Apply the invalidation rules around every mutating call.

    ``execute`` awaits the write and, only when it succeeds, marks the
    affected resource families stale. Re-fetching happens in the
    background; the write's own result is returned without waiting for
    it, so callers must not expect fresh reads right after a write.
    """

    def __init__(
        self,
        cache: RemoteDataCache,
        rules: Optional[Mapping[MutationAction, tuple[ResourceFamily, ...]]] = None,
        refetch: bool = True,
    ):
        self._cache = cache
        self._rules = rules if rules is not None else INVALIDATION_RULES
        self._refetch = refetch

    @property
    def cache(self) -> RemoteDataCache:
        return self._cache

    async def execute(
        self,
        action: MutationAction,
        operation: Callable[[], Awaitable[T]],
    ) -> T:
        try:
            result = await operation()
        except Exception as e:
            logger.warning("Mutation %s failed: %s", MutationAction(action).value, e)
            raise

        self.invalidate_for(action)
        return result

    def invalidate_for(self, action: MutationAction) -> tuple[ResourceFamily, ...]:
        families = self._rules[MutationAction(action)]
        for family in families:
            self._cache.invalidate_family(family, refetch=self._refetch)
        logger.debug(
            "Mutation %s invalidated: %s",
            MutationAction(action).value,
            ", ".join(f.value for f in families),
        )
        return families
