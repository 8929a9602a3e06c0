"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .identity_repository import SqlIdentityRepository
from .transfer_repository import SqlTransferRepository

__all__ = [
    "SqlAccountRepository",
    "SqlIdentityRepository",
    "SqlTransferRepository",
]
