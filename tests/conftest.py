"""Shared fixtures: a file-backed SQLite ledger per test."""

from __future__ import annotations

import typing as t

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from funds_ledger.core.config import DatabaseSettings, Settings, TransferSettings
from funds_ledger.core.container import ApplicationContainer
from funds_ledger.db.models import Account as AccountModel
from funds_ledger.db.models import Transfer as TransferModel
from funds_ledger.domain.identities import Identity
from funds_ledger.infrastructure.database.session import init_db


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", isolation_level=None),
        transfers=TransferSettings(retry_base_delay=0.0),
    )


@pytest_asyncio.fixture
async def container(settings) -> t.AsyncIterator[ApplicationContainer]:
    app = ApplicationContainer(settings=settings)
    await init_db(app.engine)
    try:
        yield app
    finally:
        await app.dispose()


@pytest.fixture
def create_holder(container):
    async def _create(username: str, balance_cents: int = 0) -> Identity:
        async with container.session_factory() as session, session.begin():
            return await container.identities.create_identity(
                username,
                session,
                opening_balance_cents=balance_cents,
            )

    return _create


@pytest.fixture
def balance_of(container):
    async def _balance(identity: Identity) -> int:
        async with container.session_factory() as session:
            result = await session.execute(
                select(AccountModel.balance_cents).where(AccountModel.identity_id == identity.id)
            )
            return int(result.scalar_one())

    return _balance


@pytest.fixture
def transfer_count(container):
    async def _count() -> int:
        async with container.session_factory() as session:
            result = await session.execute(select(func.count(TransferModel.id)))
            return int(result.scalar_one())

    return _count
