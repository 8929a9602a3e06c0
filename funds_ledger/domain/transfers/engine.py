"""Transfer engine: debit, credit and record creation as one atomic unit."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.core.reference import ReferenceGenerator, generate_reference
from funds_ledger.domain.accounts.exceptions import AccountNotFoundError
from funds_ledger.domain.accounts.repository import LedgerMutator
from funds_ledger.domain.identities.repository import IdentityResolver
from funds_ledger.infrastructure.database.repositories.transfer_repository import SqlTransferRepository
from funds_ledger.infrastructure.database.transaction import TransactionManager

from .exceptions import (
    InvalidTransferError,
    RecipientNotFoundError,
    RetriesExhaustedError,
    TransactionConflictError,
)
from .models import Transfer, TransferInput
from .repository import TransferRepository
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


class TransferEngine:
    """Moves funds between two identities.

    Each attempt runs in its own transaction owned by ``transactions``; the
    bound session is passed explicitly to the identity resolver, the ledger
    mutator and the record store, so either all three effects commit or none
    do. The engine keeps no state between calls.
    """

    def __init__(
        self,
        transactions: TransactionManager,
        identities: IdentityResolver,
        ledger: LedgerMutator,
        *,
        transfer_repository_factory: Callable[[AsyncSession], TransferRepository] = SqlTransferRepository,
        reference_generator: ReferenceGenerator = generate_reference,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._transactions = transactions
        self._identities = identities
        self._ledger = ledger
        self._transfer_repository_factory = transfer_repository_factory
        self._reference_generator = reference_generator
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def attempt_transfer(self, transfer_input: TransferInput) -> Transfer:
        """Run a single transfer attempt in a fresh transaction."""
        self._validate(transfer_input)

        async def _unit_of_work(session: AsyncSession) -> Transfer:
            return await self._execute(transfer_input, session)

        return await self._transactions.run_in_transaction(_unit_of_work)

    async def transfer_with_retry(self, transfer_input: TransferInput, max_retries: int | None = None) -> Transfer:
        """Attempt the transfer, retrying only on transaction conflicts.

        Makes at most ``max_retries + 1`` attempts. Business rejections
        propagate from the first attempt that raises them; a conflict that
        outlasts the budget surfaces as ``RetriesExhaustedError``.
        """
        budget = self._retry_policy.max_retries if max_retries is None else max_retries
        if budget < 0:
            raise ValueError("max_retries cannot be negative")

        attempt = 0
        while True:
            attempt += 1
            try:
                transfer = await self.attempt_transfer(transfer_input)
            except TransactionConflictError as exc:
                if not self._retry_policy.should_retry(exc, attempt - 1, budget):
                    logger.error(
                        "Transfer from %s to %s gave up after %s attempts: %s",
                        transfer_input.sender_id,
                        transfer_input.receiver_handle,
                        attempt,
                        exc,
                    )
                    raise RetriesExhaustedError(attempt) from exc
                delay = self._retry_policy.get_delay(attempt)
                logger.warning(
                    "Transfer attempt %s from %s conflicted, retrying in %.3fs: %s",
                    attempt,
                    transfer_input.sender_id,
                    delay,
                    exc,
                )
                await self._sleep(delay)
                continue

            logger.info(
                "Transfer %s of %s from %s to %s committed on attempt %s",
                transfer.reference,
                transfer.amount_cents,
                transfer.sender_username,
                transfer.receiver_username,
                attempt,
            )
            return transfer

    @staticmethod
    def _validate(transfer_input: TransferInput) -> None:
        amount = transfer_input.amount_cents
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidTransferError(f"Transfer amount must be a positive integer number of cents, got {amount!r}")
        if not transfer_input.receiver_handle:
            raise InvalidTransferError("Receiver handle is required")

    async def _execute(self, transfer_input: TransferInput, session: AsyncSession) -> Transfer:
        amount = transfer_input.amount_cents

        sender = await self._identities.resolve_by_id(transfer_input.sender_id, session)
        receiver = await self._identities.resolve_by_handle(
            transfer_input.receiver_handle,
            session,
            include_account=True,
        )
        if receiver is None:
            raise RecipientNotFoundError(transfer_input.receiver_handle)
        if receiver.id == sender.id:
            raise InvalidTransferError("Cannot transfer to yourself")
        if sender.account is None:
            raise AccountNotFoundError(f"No account for identity {sender.id}")
        if receiver.account is None:
            raise AccountNotFoundError(f"No account for identity {receiver.id}")

        balance_before = sender.account.balance_cents
        debited = await self._ledger.debit_account(sender.account.id, amount, session)
        if debited.balance_cents != balance_before - amount:
            # another writer touched the account between our read and the debit
            raise TransactionConflictError(
                f"Balance of account {sender.account.id} moved from {balance_before} "
                f"to {debited.balance_cents + amount} during the transfer"
            )
        await self._ledger.credit_account(receiver.account.id, amount, session)

        return await self._transfer_repository_factory(session).add(
            reference=self._reference_generator(),
            sender_id=sender.id,
            sender_username=sender.username,
            receiver_id=receiver.id,
            receiver_username=receiver.username,
            amount_cents=amount,
            balance_before_cents=balance_before,
            balance_after_cents=debited.balance_cents,
        )
