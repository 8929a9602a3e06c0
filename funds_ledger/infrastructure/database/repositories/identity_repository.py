"""SQLAlchemy powered repository for identity lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from funds_ledger.db.models import Identity as IdentityModel
from funds_ledger.domain.identities.models import Identity
from funds_ledger.domain.identities.repository import IdentityRepository


class SqlIdentityRepository(IdentityRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, identity_id: str, *, include_account: bool = False) -> Identity | None:
        return await self._get_one(IdentityModel.id == identity_id, include_account)

    async def get_by_username(self, username: str, *, include_account: bool = False) -> Identity | None:
        return await self._get_one(IdentityModel.username == username, include_account)

    async def create(self, *, username: str) -> Identity:
        model = IdentityModel(username=username)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return Identity.from_orm(model)

    async def _get_one(self, criterion, include_account: bool) -> Identity | None:
        stmt = select(IdentityModel).where(criterion)
        if include_account:
            # balances must come from this transaction, not the identity map
            stmt = stmt.options(selectinload(IdentityModel.account)).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Identity.from_orm(model, include_account=include_account)
