"""Domain models for identities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from funds_ledger.db import models as orm
from funds_ledger.domain.accounts.models import AccountSnapshot


@dataclass(slots=True)
class Identity:
    id: str
    username: str
    created_at: Optional[datetime] = None
    account: Optional[AccountSnapshot] = None

    @classmethod
    def from_orm(cls, instance: orm.Identity, *, include_account: bool = False) -> "Identity":
        account = None
        if include_account and instance.account is not None:
            account = AccountSnapshot.from_orm(instance.account)
        return cls(
            id=str(instance.id),
            username=instance.username,
            created_at=instance.created_at,
            account=account,
        )
