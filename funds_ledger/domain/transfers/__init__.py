"""Transfer domain models and errors."""

from .exceptions import (
    DuplicateReferenceError,
    InsufficientFundsError,
    InvalidTransferError,
    RecipientNotFoundError,
    RetriesExhaustedError,
    TransactionConflictError,
    TransferError,
)
from .models import PaginatedResult, Pagination, Transfer, TransferInput, TransferQuery

__all__ = [
    "Transfer",
    "TransferInput",
    "TransferQuery",
    "Pagination",
    "PaginatedResult",
    "TransferError",
    "RecipientNotFoundError",
    "InvalidTransferError",
    "InsufficientFundsError",
    "TransactionConflictError",
    "DuplicateReferenceError",
    "RetriesExhaustedError",
]
