"""Transfer domain specific exceptions."""

from __future__ import annotations

from funds_ledger.domain.accounts.exceptions import InsufficientFundsError


class TransferError(Exception):
    """Base class for transfer domain errors."""


class RecipientNotFoundError(TransferError):
    """Raised when the receiver handle does not resolve to an identity."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"Recipient not found: {handle}")
        self.handle = handle


class InvalidTransferError(TransferError):
    """Raised when a transfer request is rejected before touching any balance."""


class TransactionConflictError(TransferError):
    """Raised when the datastore aborts a transaction because of a concurrent writer.

    This is the only transient failure; it is safe to run the attempt again
    in a brand new transaction.
    """


class DuplicateReferenceError(TransactionConflictError):
    """Raised when a freshly generated reference collides with a stored one."""


class RetriesExhaustedError(TransferError):
    """Raised when conflicts persist after the configured number of retries."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Transfer aborted after {attempts} conflicting attempts")
        self.attempts = attempts


__all__ = [
    "TransferError",
    "RecipientNotFoundError",
    "InvalidTransferError",
    "InsufficientFundsError",
    "TransactionConflictError",
    "DuplicateReferenceError",
    "RetriesExhaustedError",
]
