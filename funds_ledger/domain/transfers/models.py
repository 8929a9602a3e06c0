"""Domain models for transfers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from funds_ledger.db import models as orm

T = TypeVar("T")


@dataclass(slots=True)
class TransferInput:
    sender_id: str
    receiver_handle: str
    amount_cents: int


@dataclass(slots=True)
class Transfer:
    id: int
    reference: str
    sender_id: str
    sender_username: str
    receiver_id: str
    receiver_username: str
    amount_cents: int
    balance_before_cents: int
    balance_after_cents: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Transfer) -> "Transfer":
        return cls(
            id=int(instance.id),
            reference=instance.reference,
            sender_id=str(instance.sender_id),
            sender_username=instance.sender_username,
            receiver_id=str(instance.receiver_id),
            receiver_username=instance.receiver_username,
            amount_cents=int(instance.amount_cents),
            balance_before_cents=int(instance.balance_before_cents),
            balance_after_cents=int(instance.balance_after_cents),
            created_at=instance.created_at,
        )


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Express a window bound in UTC; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(slots=True)
class TransferQuery:
    start_period: Optional[datetime] = None
    end_period: Optional[datetime] = None


@dataclass(slots=True)
class Pagination:
    skip: int = 0
    take: int = 20


@dataclass(slots=True)
class PaginatedResult(Generic[T]):
    records: list[T] = field(default_factory=list)
    count: int = 0
