"""SQLAlchemy implementation for the transfer record store"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.db.models import Transfer as TransferModel
from funds_ledger.domain.transfers.exceptions import DuplicateReferenceError
from funds_ledger.domain.transfers.models import Pagination, Transfer, TransferQuery, as_utc
from funds_ledger.domain.transfers.repository import TransferRepository
from funds_ledger.infrastructure.database.transaction import extract_sqlstate

UNIQUE_VIOLATION = "23505"
REFERENCE_INDEX = "ix_transfers_reference"
# SQLite names the column rather than the index
REFERENCE_COLUMN = "transfers.reference"


def build_filter(query: TransferQuery) -> list:
    """Translate the optional creation-time window into SQL criteria."""
    criteria = []
    start, end = as_utc(query.start_period), as_utc(query.end_period)
    if start is not None and end is not None:
        criteria.append(TransferModel.created_at.between(start, end))
    elif start is not None:
        criteria.append(TransferModel.created_at >= start)
    elif end is not None:
        criteria.append(TransferModel.created_at <= end)
    return criteria


def is_reference_collision(exc: IntegrityError) -> bool:
    """True when ``exc`` is the unique index on ``transfers.reference`` firing."""
    sqlstate = extract_sqlstate(exc)
    if sqlstate is not None and sqlstate != UNIQUE_VIOLATION:
        return False
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        # asyncpg exposes constraint_name, psycopg puts it on diag
        name = getattr(candidate, "constraint_name", None) or getattr(
            getattr(candidate, "diag", None), "constraint_name", None
        )
        if name:
            return name == REFERENCE_INDEX
    return REFERENCE_COLUMN in str(orig)


class SqlTransferRepository(TransferRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(
        self,
        *,
        reference: str,
        sender_id: str,
        sender_username: str,
        receiver_id: str,
        receiver_username: str,
        amount_cents: int,
        balance_before_cents: int,
        balance_after_cents: int,
    ) -> Transfer:
        model = TransferModel(
            reference=reference,
            sender_id=sender_id,
            sender_username=sender_username,
            receiver_id=receiver_id,
            receiver_username=receiver_username,
            amount_cents=amount_cents,
            balance_before_cents=balance_before_cents,
            balance_after_cents=balance_after_cents,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_reference_collision(exc):
                raise DuplicateReferenceError(f"Reference already used: {reference}") from exc
            raise
        await self.session.refresh(model)
        return Transfer.from_orm(model)

    async def get_by_reference(self, reference: str) -> Transfer | None:
        stmt = select(TransferModel).where(TransferModel.reference == reference)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return Transfer.from_orm(model) if model is not None else None

    async def find_for_viewer(
        self,
        viewer_id: str,
        query: TransferQuery,
        pagination: Pagination,
    ) -> tuple[Sequence[Transfer], int]:
        criteria = [
            or_(TransferModel.sender_id == viewer_id, TransferModel.receiver_id == viewer_id),
            *build_filter(query),
        ]
        stmt = (
            select(TransferModel)
            .where(*criteria)
            .order_by(desc(TransferModel.created_at), desc(TransferModel.id))
            .offset(pagination.skip)
            .limit(pagination.take)
        )
        count_stmt = select(func.count(TransferModel.id)).where(*criteria)

        result = await self.session.execute(stmt)
        records = [Transfer.from_orm(row) for row in result.scalars().all()]
        total = (await self.session.execute(count_stmt)).scalar() or 0
        return records, int(total)
