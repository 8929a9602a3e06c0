"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from funds_ledger.db import models as orm


@dataclass(slots=True)
class AccountSnapshot:
    id: str
    identity_id: str
    balance_cents: int
    currency: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Account) -> "AccountSnapshot":
        return cls(
            id=str(instance.id),
            identity_id=str(instance.identity_id),
            balance_cents=int(instance.balance_cents),
            currency=instance.currency,
            updated_at=instance.updated_at,
        )
