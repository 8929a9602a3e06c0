"""Ledger mutator: the only code path that changes account balances."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.infrastructure.database.repositories.account_repository import SqlAccountRepository

from .exceptions import AccountNotFoundError, InsufficientFundsError
from .models import AccountSnapshot
from .repository import AccountRepository

logger = logging.getLogger(__name__)


def _require_positive(amount_cents: int) -> None:
    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int) or amount_cents <= 0:
        raise ValueError(f"amount must be a positive integer number of cents, got {amount_cents!r}")


@dataclass(slots=True)
class AccountService:
    """Debit/credit primitives that run inside the caller's transaction.

    None of the methods open, commit or roll back a transaction; the
    session handed in decides the scope.
    """

    repository_factory: Callable[[AsyncSession], AccountRepository] = SqlAccountRepository

    async def get_account(self, account_id: str, session: AsyncSession) -> AccountSnapshot:
        account = await self.repository_factory(session).get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def get_balance(self, account_id: str, session: AsyncSession) -> int:
        account = await self.get_account(account_id, session)
        return account.balance_cents

    async def debit_account(self, account_id: str, amount_cents: int, session: AsyncSession) -> AccountSnapshot:
        _require_positive(amount_cents)
        repository = self.repository_factory(session)
        updated = await repository.apply_delta(account_id, -amount_cents)
        if updated is None:
            current = await repository.get(account_id)
            if current is None:
                raise AccountNotFoundError(account_id)
            raise InsufficientFundsError(account_id, current.balance_cents, amount_cents)
        logger.debug("Debited %s from account %s, balance now %s", amount_cents, account_id, updated.balance_cents)
        return updated

    async def credit_account(self, account_id: str, amount_cents: int, session: AsyncSession) -> AccountSnapshot:
        _require_positive(amount_cents)
        updated = await self.repository_factory(session).apply_delta(account_id, amount_cents)
        if updated is None:
            raise AccountNotFoundError(account_id)
        logger.debug("Credited %s to account %s, balance now %s", amount_cents, account_id, updated.balance_cents)
        return updated

    async def fund_account(self, account_id: str, amount_cents: int, session: AsyncSession) -> AccountSnapshot:
        """Add money from outside the ledger, e.g. a top-up."""
        account = await self.credit_account(account_id, amount_cents, session)
        logger.info("Funded account %s with %s", account_id, amount_cents)
        return account
