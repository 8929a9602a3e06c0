"""Repository protocols for account balances."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from .models import AccountSnapshot


class AccountRepository(Protocol):
    """Session-bound persistence for account rows."""

    async def get(self, account_id: str) -> AccountSnapshot | None:
        ...

    async def create(self, *, identity_id: str, balance_cents: int, currency: str) -> AccountSnapshot:
        ...

    async def apply_delta(self, account_id: str, delta_cents: int) -> AccountSnapshot | None:
        ...


class LedgerMutator(Protocol):
    """Atomic balance mutators scoped to a caller-supplied session."""

    async def debit_account(self, account_id: str, amount_cents: int, session: AsyncSession) -> AccountSnapshot:
        ...

    async def credit_account(self, account_id: str, amount_cents: int, session: AsyncSession) -> AccountSnapshot:
        ...
