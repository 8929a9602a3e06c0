"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from funds_ledger.core.config import Settings, get_settings
from funds_ledger.core.logging import configure_logging
from funds_ledger.core.reference import reference_generator
from funds_ledger.domain.accounts.service import AccountService
from funds_ledger.domain.identities.service import IdentityService
from funds_ledger.domain.transfers.engine import TransferEngine
from funds_ledger.domain.transfers.query import TransferQueryService
from funds_ledger.domain.transfers.retry import RetryPolicy
from funds_ledger.infrastructure.database.session import build_engine, build_session_factory
from funds_ledger.infrastructure.database.transaction import TransactionManager


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine = field(init=False)
    session_factory: async_sessionmaker[AsyncSession] = field(init=False)
    transactions: TransactionManager = field(init=False)
    identities: IdentityService = field(init=False)
    accounts: AccountService = field(init=False)
    transfers: TransferEngine = field(init=False)
    transfer_queries: TransferQueryService = field(init=False)

    def __post_init__(self) -> None:
        configure_logging(self.settings)
        self.engine = build_engine(self.settings.database, debug=self.settings.debug)
        self.session_factory = build_session_factory(self.engine)

        transfer_settings = self.settings.transfers
        self.transactions = TransactionManager(
            self.session_factory,
            retryable_sqlstates=transfer_settings.retryable_sqlstates,
            timeout=transfer_settings.attempt_timeout_seconds,
        )
        self.identities = IdentityService()
        self.accounts = AccountService()
        self.transfers = TransferEngine(
            self.transactions,
            self.identities,
            self.accounts,
            reference_generator=reference_generator(transfer_settings.reference_length),
            retry_policy=RetryPolicy.from_settings(transfer_settings),
        )
        self.transfer_queries = TransferQueryService(
            self.session_factory,
            max_page_size=transfer_settings.max_page_size,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer(settings=get_settings())


__all__ = ["ApplicationContainer", "get_container"]
