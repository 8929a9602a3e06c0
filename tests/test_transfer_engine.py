"""Atomic transfer behaviour against a real database."""

from __future__ import annotations

import asyncio

import pytest

from funds_ledger.domain.accounts.exceptions import AccountNotFoundError
from funds_ledger.domain.transfers import (
    InsufficientFundsError,
    InvalidTransferError,
    RecipientNotFoundError,
    TransferInput,
)
from funds_ledger.domain.transfers.engine import TransferEngine
from funds_ledger.infrastructure.database.transaction import TransactionManager


class FailingCreditLedger:
    """Applies debits for real, then refuses every credit."""

    def __init__(self, inner) -> None:
        self.inner = inner

    async def debit_account(self, account_id, amount_cents, session):
        return await self.inner.debit_account(account_id, amount_cents, session)

    async def credit_account(self, account_id, amount_cents, session):
        raise AccountNotFoundError(account_id)


class SlowDebitLedger:
    def __init__(self, inner, delay: float) -> None:
        self.inner = inner
        self.delay = delay

    async def debit_account(self, account_id, amount_cents, session):
        result = await self.inner.debit_account(account_id, amount_cents, session)
        await asyncio.sleep(self.delay)
        return result

    async def credit_account(self, account_id, amount_cents, session):
        return await self.inner.credit_account(account_id, amount_cents, session)


@pytest.mark.asyncio
async def test_successful_transfer_moves_funds_and_records_snapshot(container, create_holder, balance_of):
    sender = await create_holder("alice", 500)
    receiver = await create_holder("bob", 50)

    transfer = await container.transfers.transfer_with_retry(
        TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=200)
    )

    assert transfer.amount_cents == 200
    assert transfer.balance_before_cents == 500
    assert transfer.balance_after_cents == 300
    assert transfer.sender_id == sender.id
    assert transfer.receiver_id == receiver.id
    assert transfer.sender_username == "alice"
    assert transfer.receiver_username == "bob"
    assert transfer.created_at is not None
    assert await balance_of(sender) == 300
    assert await balance_of(receiver) == 250


@pytest.mark.asyncio
async def test_transfer_conserves_total_balance(container, create_holder, balance_of):
    sender = await create_holder("alice", 1_000)
    receiver = await create_holder("bob", 321)

    for amount in (1, 99, 400):
        await container.transfers.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=amount)
        )

    assert await balance_of(sender) == 1_000 - 500
    assert await balance_of(receiver) == 321 + 500
    assert await balance_of(sender) + await balance_of(receiver) == 1_321


@pytest.mark.asyncio
async def test_stored_record_matches_returned_transfer(container, create_holder):
    sender = await create_holder("alice", 500)
    await create_holder("bob", 0)

    transfer = await container.transfers.attempt_transfer(
        TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=120)
    )
    stored = await container.transfer_queries.get_by_reference(transfer.reference)

    assert stored is not None
    assert stored.id == transfer.id
    assert stored.balance_after_cents == stored.balance_before_cents - stored.amount_cents


@pytest.mark.asyncio
async def test_insufficient_funds_leaves_everything_untouched(container, create_holder, balance_of, transfer_count):
    sender = await create_holder("alice", 100)
    receiver = await create_holder("bob", 10)

    with pytest.raises(InsufficientFundsError) as excinfo:
        await container.transfers.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=150)
        )

    assert excinfo.value.balance_cents == 100
    assert excinfo.value.amount_cents == 150
    assert await balance_of(sender) == 100
    assert await balance_of(receiver) == 10
    assert await transfer_count() == 0


@pytest.mark.asyncio
async def test_unknown_recipient_is_rejected_without_side_effects(
    container, create_holder, balance_of, transfer_count
):
    sender = await create_holder("alice", 500)

    with pytest.raises(RecipientNotFoundError) as excinfo:
        await container.transfers.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="nouser", amount_cents=100)
        )

    assert excinfo.value.handle == "nouser"
    assert await balance_of(sender) == 500
    assert await transfer_count() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -5, 1.5, True])
async def test_non_positive_or_fractional_amounts_are_rejected(container, create_holder, balance_of, amount):
    sender = await create_holder("alice", 500)
    await create_holder("bob", 0)

    with pytest.raises(InvalidTransferError):
        await container.transfers.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=amount)
        )

    assert await balance_of(sender) == 500


@pytest.mark.asyncio
async def test_transfer_to_self_is_rejected(container, create_holder, balance_of, transfer_count):
    sender = await create_holder("alice", 500)

    with pytest.raises(InvalidTransferError):
        await container.transfers.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="alice", amount_cents=100)
        )

    assert await balance_of(sender) == 500
    assert await transfer_count() == 0


@pytest.mark.asyncio
async def test_failed_credit_rolls_back_the_debit(container, create_holder, balance_of, transfer_count):
    sender = await create_holder("alice", 500)
    receiver = await create_holder("bob", 50)
    engine = TransferEngine(
        container.transactions,
        container.identities,
        FailingCreditLedger(container.accounts),
    )

    with pytest.raises(AccountNotFoundError):
        await engine.transfer_with_retry(
            TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=200)
        )

    assert await balance_of(sender) == 500
    assert await balance_of(receiver) == 50
    assert await transfer_count() == 0


@pytest.mark.asyncio
async def test_reference_collision_is_retried_with_a_fresh_reference(
    container, create_holder, balance_of, transfer_count
):
    sender = await create_holder("alice", 500)
    await create_holder("bob", 0)
    references = iter(["DUPLICATE001", "DUPLICATE001", "FRESHREF0002"])
    sleeps: list[float] = []

    async def record_sleep(delay: float) -> None:
        sleeps.append(delay)

    engine = TransferEngine(
        container.transactions,
        container.identities,
        container.accounts,
        reference_generator=lambda: next(references),
        sleep=record_sleep,
    )
    first = await engine.transfer_with_retry(TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=100))
    second = await engine.transfer_with_retry(TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=100))

    assert first.reference == "DUPLICATE001"
    assert second.reference == "FRESHREF0002"
    assert len(sleeps) == 1
    assert second.balance_before_cents == 400
    assert await balance_of(sender) == 300
    assert await transfer_count() == 2


@pytest.mark.asyncio
async def test_attempt_timeout_rolls_back(container, create_holder, balance_of, transfer_count):
    sender = await create_holder("alice", 500)
    await create_holder("bob", 0)
    engine = TransferEngine(
        TransactionManager(container.session_factory, timeout=0.05),
        container.identities,
        SlowDebitLedger(container.accounts, delay=1.0),
    )

    with pytest.raises(asyncio.TimeoutError):
        await engine.transfer_with_retry(TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=100))

    assert await balance_of(sender) == 500
    assert await transfer_count() == 0


@pytest.mark.asyncio
async def test_concurrent_transfers_from_one_sender_both_land(container, create_holder, balance_of, transfer_count):
    sender = await create_holder("alice", 1_000)
    receiver = await create_holder("bob", 0)
    request = TransferInput(sender_id=sender.id, receiver_handle="bob", amount_cents=100)

    first, second = await asyncio.gather(
        container.transfers.transfer_with_retry(request),
        container.transfers.transfer_with_retry(request),
    )

    assert await balance_of(sender) == 800
    assert await balance_of(receiver) == 200
    assert await balance_of(sender) + await balance_of(receiver) == 1_000
    assert await transfer_count() == 2
    assert first.reference != second.reference
    # each attempt saw the balance the other one left behind
    assert sorted(
        (t.balance_before_cents, t.balance_after_cents) for t in (first, second)
    ) == [(900, 800), (1_000, 900)]
