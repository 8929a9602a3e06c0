"""Ledger mutator and identity resolver."""

from __future__ import annotations

import pytest

from funds_ledger.domain.accounts import AccountNotFoundError, InsufficientFundsError
from funds_ledger.domain.identities import IdentityAlreadyExistsError, IdentityNotFoundError


@pytest.mark.asyncio
async def test_debit_and_credit_return_post_mutation_balance(container, create_holder):
    holder = await create_holder("alice", 500)
    accounts = container.accounts

    async with container.session_factory() as session, session.begin():
        debited = await accounts.debit_account(holder.account.id, 120, session)
        credited = await accounts.credit_account(holder.account.id, 20, session)
        current = await accounts.get_balance(holder.account.id, session)

    assert debited.balance_cents == 380
    assert credited.balance_cents == 400
    assert current == 400


@pytest.mark.asyncio
async def test_debit_below_zero_raises_insufficient_funds(container, create_holder, balance_of):
    holder = await create_holder("alice", 100)

    with pytest.raises(InsufficientFundsError):
        async with container.session_factory() as session, session.begin():
            await container.accounts.debit_account(holder.account.id, 101, session)

    assert await balance_of(holder) == 100


@pytest.mark.asyncio
async def test_debit_can_empty_the_account(container, create_holder, balance_of):
    holder = await create_holder("alice", 100)

    async with container.session_factory() as session, session.begin():
        snapshot = await container.accounts.debit_account(holder.account.id, 100, session)

    assert snapshot.balance_cents == 0
    assert await balance_of(holder) == 0


@pytest.mark.asyncio
async def test_mutating_missing_account_raises(container):
    async with container.session_factory() as session, session.begin():
        with pytest.raises(AccountNotFoundError):
            await container.accounts.debit_account("missing", 10, session)
        with pytest.raises(AccountNotFoundError):
            await container.accounts.credit_account("missing", 10, session)


@pytest.mark.asyncio
async def test_fund_account_adds_to_balance(container, create_holder, balance_of):
    holder = await create_holder("alice", 0)

    async with container.session_factory() as session, session.begin():
        await container.accounts.fund_account(holder.account.id, 2_500, session)

    assert await balance_of(holder) == 2_500


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -1])
async def test_fund_account_rejects_non_positive_amounts(container, create_holder, amount):
    holder = await create_holder("alice", 0)

    async with container.session_factory() as session:
        with pytest.raises(ValueError):
            await container.accounts.fund_account(holder.account.id, amount, session)


@pytest.mark.asyncio
async def test_resolve_identities(container, create_holder):
    alice = await create_holder("alice", 700)

    async with container.session_factory() as session:
        by_id = await container.identities.resolve_by_id(alice.id, session)
        by_handle = await container.identities.resolve_by_handle("alice", session, include_account=True)
        without_account = await container.identities.resolve_by_handle("alice", session)
        missing = await container.identities.resolve_by_handle("nouser", session)

    assert by_id.username == "alice"
    assert by_id.account.balance_cents == 700
    assert by_handle.account.id == alice.account.id
    assert without_account.account is None
    assert missing is None


@pytest.mark.asyncio
async def test_resolve_by_unknown_id_raises(container):
    async with container.session_factory() as session:
        with pytest.raises(IdentityNotFoundError):
            await container.identities.resolve_by_id("missing", session)


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(create_holder):
    await create_holder("alice")

    with pytest.raises(IdentityAlreadyExistsError):
        await create_holder("alice")
