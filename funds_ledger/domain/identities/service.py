"""Identity resolution for transfer participants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.domain.accounts.repository import AccountRepository
from funds_ledger.infrastructure.database.repositories.account_repository import SqlAccountRepository
from funds_ledger.infrastructure.database.repositories.identity_repository import SqlIdentityRepository

from .exceptions import IdentityAlreadyExistsError, IdentityNotFoundError
from .models import Identity
from .repository import IdentityRepository


@dataclass(slots=True)
class IdentityService:
    repository_factory: Callable[[AsyncSession], IdentityRepository] = SqlIdentityRepository
    account_repository_factory: Callable[[AsyncSession], AccountRepository] = SqlAccountRepository

    async def resolve_by_id(self, identity_id: str, session: AsyncSession) -> Identity:
        """Load an identity together with its account.

        The caller is assumed to be authenticated, so a miss is a data error
        rather than a business rejection.
        """
        identity = await self.repository_factory(session).get_by_id(identity_id, include_account=True)
        if identity is None:
            raise IdentityNotFoundError(identity_id)
        return identity

    async def resolve_by_handle(
        self,
        handle: str,
        session: AsyncSession,
        include_account: bool = False,
    ) -> Identity | None:
        return await self.repository_factory(session).get_by_username(handle, include_account=include_account)

    async def create_identity(
        self,
        username: str,
        session: AsyncSession,
        *,
        opening_balance_cents: int = 0,
        currency: str = "USD",
    ) -> Identity:
        if opening_balance_cents < 0:
            raise ValueError("opening balance cannot be negative")
        repository = self.repository_factory(session)
        existing = await repository.get_by_username(username)
        if existing is not None:
            raise IdentityAlreadyExistsError(f"Username already taken: {username}")

        identity = await repository.create(username=username)
        identity.account = await self.account_repository_factory(session).create(
            identity_id=identity.id,
            balance_cents=opening_balance_cents,
            currency=currency,
        )
        return identity
