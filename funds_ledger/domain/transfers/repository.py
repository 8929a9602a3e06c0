"""Repository protocol for the append-only transfer record store."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Pagination, Transfer, TransferQuery


class TransferRepository(Protocol):
    """Insert and read transfer records. Rows are never updated or deleted."""

    async def add(
        self,
        *,
        reference: str,
        sender_id: str,
        sender_username: str,
        receiver_id: str,
        receiver_username: str,
        amount_cents: int,
        balance_before_cents: int,
        balance_after_cents: int,
    ) -> Transfer:
        ...

    async def get_by_reference(self, reference: str) -> Transfer | None:
        ...

    async def find_for_viewer(
        self,
        viewer_id: str,
        query: TransferQuery,
        pagination: Pagination,
    ) -> tuple[Sequence[Transfer], int]:
        ...
