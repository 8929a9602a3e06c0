"""Account domain models and errors."""

from .models import AccountSnapshot
from .exceptions import (
    AccountError,
    AccountNotFoundError,
    InsufficientFundsError,
)

__all__ = [
    "AccountSnapshot",
    "AccountError",
    "AccountNotFoundError",
    "InsufficientFundsError",
]
