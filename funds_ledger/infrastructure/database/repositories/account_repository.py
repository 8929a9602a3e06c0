"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.db.models import Account as AccountModel
from funds_ledger.domain.accounts.models import AccountSnapshot
from funds_ledger.domain.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, account_id: str) -> AccountSnapshot | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return AccountSnapshot.from_orm(model) if model is not None else None

    async def create(self, *, identity_id: str, balance_cents: int, currency: str) -> AccountSnapshot:
        model = AccountModel(identity_id=identity_id, balance_cents=balance_cents, currency=currency)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return AccountSnapshot.from_orm(model)

    async def apply_delta(self, account_id: str, delta_cents: int) -> AccountSnapshot | None:
        """Shift the balance by ``delta_cents`` unless it would go negative.

        Returns ``None`` when no row matched, either because the account is
        missing or because the guard rejected the change.
        """
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.balance_cents + delta_cents >= 0,
            )
            .values(balance_cents=AccountModel.balance_cents + delta_cents)
            .execution_options(synchronize_session="fetch")
            .returning(
                AccountModel.id,
                AccountModel.identity_id,
                AccountModel.balance_cents,
                AccountModel.currency,
                AccountModel.updated_at,
            )
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return AccountSnapshot(
            id=str(row.id),
            identity_id=str(row.identity_id),
            balance_cents=int(row.balance_cents),
            currency=row.currency,
            updated_at=row.updated_at,
        )
