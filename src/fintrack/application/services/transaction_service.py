"""Transaction reads and writes, CSV import and export."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, BinaryIO, Mapping, Optional, Union

from fintrack.application.cache import QueryKey, ResourceFamily
from fintrack.application.mutations import MutationAction, MutationCoordinator
from fintrack.application.ports import TransactionPort
from fintrack.application.validation import (
    TransactionForm,
    TransactionUpdateForm,
    validate_form,
)
from fintrack.domain.finance.entities import (
    Transaction,
    TransactionFilters,
    TransactionPage,
)
from fintrack.domain.shared.periods import ensure_valid_range

if TYPE_CHECKING:
    from fintrack.application.factories import GatewayFactory

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, gateway: TransactionPort, coordinator: MutationCoordinator):
        self._gateway = gateway
        self._coordinator = coordinator
        self._cache = coordinator.cache

    @classmethod
    def from_factory(cls, factory: GatewayFactory) -> TransactionService:
        return cls(
            gateway=factory.transaction_gateway(),
            coordinator=factory.coordinator,
        )

    async def list(self, filters: Optional[TransactionFilters] = None) -> TransactionPage:
        """One page of the listing; every filter combination is cached separately."""
        params = filters.as_params() if filters else {}
        return await self._cache.read(
            QueryKey.of(ResourceFamily.TRANSACTIONS, **params),
            lambda _key: self._gateway.list(filters),
        )

    async def list_range(
        self,
        start: date,
        end: date,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> list[Transaction]:
        """Every transaction dated within ``[start, end]``, across all pages."""
        ensure_valid_range(start, end)
        filters = TransactionFilters(
            start_date=start,
            end_date=end,
            account_id=account_id,
            category_id=category_id,
        )
        return await self._cache.read(
            QueryKey.of(ResourceFamily.TRANSACTIONS, scope="all", **filters.as_params()),
            lambda _key: self._gateway.list_all(filters),
        )

    async def get(self, transaction_id: int) -> Transaction:
        return await self._cache.read(
            QueryKey.of(ResourceFamily.TRANSACTIONS, id=transaction_id),
            lambda _key: self._gateway.get(transaction_id),
        )

    async def create(self, data: Mapping[str, Any]) -> Transaction:
        form = validate_form(TransactionForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.CREATE_TRANSACTION,
            lambda: self._gateway.create(form.to_payload()),
        )

    async def update(self, transaction_id: int, data: Mapping[str, Any]) -> Transaction:
        form = validate_form(TransactionUpdateForm, data).unwrap()
        return await self._coordinator.execute(
            MutationAction.UPDATE_TRANSACTION,
            lambda: self._gateway.update(transaction_id, form.to_payload()),
        )

    async def delete(self, transaction_id: int) -> None:
        await self._coordinator.execute(
            MutationAction.DELETE_TRANSACTION,
            lambda: self._gateway.delete(transaction_id),
        )

    async def import_csv(
        self,
        content: Union[bytes, BinaryIO],
        filename: str = "transactions.csv",
    ) -> Any:
        logger.info("Importing transactions from %s", filename)
        return await self._coordinator.execute(
            MutationAction.IMPORT_TRANSACTIONS,
            lambda: self._gateway.import_csv(content, filename),
        )

    async def export_csv(self, filters: Optional[TransactionFilters] = None) -> bytes:
        if filters and filters.start_date and filters.end_date:
            ensure_valid_range(filters.start_date, filters.end_date)
        return await self._gateway.export_csv(filters)
