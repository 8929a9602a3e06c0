"""Bounded retry policy for transaction conflicts."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

from funds_ledger.core.config import TransferSettings

from .exceptions import TransactionConflictError


@dataclass(slots=True)
class RetryPolicy:
    """Decides whether a failed attempt may run again and how long to wait.

    - max_retries: retries after the first attempt
    - backoff: 'fixed' waits base_delay every time, 'exponential' doubles it
    - jitter: scale each delay by a random factor in [0.5, 1.0]
    """

    max_retries: int = 3
    base_delay: float = 0.1
    backoff: Literal["fixed", "exponential"] = "fixed"
    max_delay: float = 2.0
    jitter: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.base_delay < 0:
            raise ValueError("base_delay cannot be negative")

    @classmethod
    def from_settings(cls, settings: TransferSettings) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.retry_base_delay,
            backoff=settings.retry_backoff,
            max_delay=settings.retry_max_delay,
            jitter=settings.retry_jitter,
        )

    def should_retry(self, exc: BaseException, retries_used: int, max_retries: int | None = None) -> bool:
        """Only conflicts are transient; business rejections never are."""
        budget = self.max_retries if max_retries is None else max_retries
        return isinstance(exc, TransactionConflictError) and retries_used < budget

    def get_delay(self, retry_number: int) -> float:
        """Seconds to sleep before retry ``retry_number`` (1-based)."""
        if self.backoff == "exponential":
            delay = self.base_delay * (2 ** max(retry_number - 1, 0))
        else:
            delay = self.base_delay
        delay = min(delay, self.max_delay)
        if self.jitter:
            delay *= random.uniform(0.5, 1.0)
        return delay
