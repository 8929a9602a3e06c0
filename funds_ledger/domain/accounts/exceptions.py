"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class InsufficientFundsError(AccountError):
    """Raised when a debit would take the balance below zero."""

    def __init__(self, account_id: str, balance_cents: int, amount_cents: int) -> None:
        super().__init__(
            f"Insufficient funds in account {account_id}: balance {balance_cents}, requested {amount_cents}"
        )
        self.account_id = account_id
        self.balance_cents = balance_cents
        self.amount_cents = amount_cents
