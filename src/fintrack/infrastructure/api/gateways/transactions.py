"""Transaction endpoints, including CSV import and export."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional, Union

from fintrack.application.ports import TransactionPort
from fintrack.domain.finance.entities import (
    Transaction,
    TransactionFilters,
    TransactionPage,
)
from fintrack.infrastructure.api.client import ApiClient, parse_model

logger = logging.getLogger(__name__)

LIST_ALL_PAGE_SIZE = 100


class TransactionGateway(TransactionPort):
    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self, filters: Optional[TransactionFilters] = None) -> TransactionPage:
        params = filters.as_params() if filters else None
        body = await self._client.get_page("/transactions", params=params)
        return parse_model(TransactionPage, body)

    async def list_all(
        self,
        filters: Optional[TransactionFilters] = None,
    ) -> list[Transaction]:
        """Walk every page of the listing and return all matching transactions."""
        base = filters or TransactionFilters()
        page_number = 1
        transactions: list[Transaction] = []

        while True:
            page_filters = base.model_copy(
                update={"page": page_number, "per_page": base.per_page or LIST_ALL_PAGE_SIZE},
            )
            page = await self.list(page_filters)
            transactions.extend(page.data)
            if not page.has_next or not page.data:
                break
            page_number += 1

        logger.debug("Fetched %d transactions over %d pages", len(transactions), page_number)
        return transactions

    async def get(self, transaction_id: int) -> Transaction:
        data = await self._client.get_data(f"/transactions/{transaction_id}")
        return parse_model(Transaction, data)

    async def create(self, payload: dict[str, Any]) -> Transaction:
        data = await self._client.post_data("/transactions", json=payload)
        return parse_model(Transaction, data)

    async def update(self, transaction_id: int, payload: dict[str, Any]) -> Transaction:
        data = await self._client.put_data(f"/transactions/{transaction_id}", json=payload)
        return parse_model(Transaction, data)

    async def delete(self, transaction_id: int) -> None:
        await self._client.delete(f"/transactions/{transaction_id}")

    async def import_csv(
        self,
        content: Union[bytes, BinaryIO],
        filename: str = "transactions.csv",
    ) -> Any:
        """Upload a CSV file as multipart form data."""
        files = {"file": (filename, content, "text/csv")}
        return await self._client.post_data("/transactions/import", files=files)

    async def export_csv(self, filters: Optional[TransactionFilters] = None) -> bytes:
        params = filters.as_params() if filters else None
        return await self._client.get_bytes("/transactions/export", params=params)
