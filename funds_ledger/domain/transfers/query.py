"""Read-only listing of a viewer's transfers."""

from __future__ import annotations

from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from funds_ledger.infrastructure.database.repositories.transfer_repository import SqlTransferRepository

from .models import PaginatedResult, Pagination, Transfer, TransferQuery, as_utc
from .repository import TransferRepository


class TransferQueryService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        max_page_size: int = 100,
        repository_factory: Callable[[AsyncSession], TransferRepository] = SqlTransferRepository,
    ) -> None:
        self._session_factory = session_factory
        self._max_page_size = max_page_size
        self._repository_factory = repository_factory

    async def find(
        self,
        viewer_id: str,
        query: TransferQuery | None = None,
        pagination: Pagination | None = None,
    ) -> PaginatedResult[Transfer]:
        """Transfers sent or received by ``viewer_id``, newest first.

        ``count`` is the size of the whole match set, not of the page.
        """
        query = query or TransferQuery()
        # window bounds are compared in UTC
        query = TransferQuery(start_period=as_utc(query.start_period), end_period=as_utc(query.end_period))
        pagination = pagination or Pagination()
        self._check_pagination(pagination)
        if (
            query.start_period is not None
            and query.end_period is not None
            and query.start_period > query.end_period
        ):
            raise ValueError("start_period must not be after end_period")

        async with self._session_factory() as session:
            records, count = await self._repository_factory(session).find_for_viewer(viewer_id, query, pagination)
        return PaginatedResult(records=list(records), count=count)

    async def get_by_reference(self, reference: str) -> Transfer | None:
        async with self._session_factory() as session:
            return await self._repository_factory(session).get_by_reference(reference)

    def _check_pagination(self, pagination: Pagination) -> None:
        if pagination.skip < 0:
            raise ValueError("skip cannot be negative")
        if not 1 <= pagination.take <= self._max_page_size:
            raise ValueError(f"take must be between 1 and {self._max_page_size}")
