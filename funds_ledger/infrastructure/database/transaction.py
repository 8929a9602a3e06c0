"""Unit-of-work helper that owns one transaction per call."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from funds_ledger.domain.transfers.exceptions import TransactionConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SERIALIZATION_FAILURE = "40001"


def extract_sqlstate(exc: BaseException) -> str | None:
    """Return the SQLSTATE carried by a wrapped driver error, if any."""
    orig = getattr(exc, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def is_serialization_failure(exc: BaseException, sqlstates: Iterable[str] = (SERIALIZATION_FAILURE,)) -> bool:
    return isinstance(exc, DBAPIError) and extract_sqlstate(exc) in set(sqlstates)


class TransactionManager:
    """Runs a coroutine inside a fresh session and transaction.

    The callable receives the bound ``AsyncSession`` and must route every
    read and write through it. The transaction commits when the callable
    returns and rolls back on any exception, cancellation included.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        retryable_sqlstates: Iterable[str] = (SERIALIZATION_FAILURE,),
        timeout: float | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._retryable_sqlstates = frozenset(retryable_sqlstates)
        self._timeout = timeout

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def run_in_transaction(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        if self._timeout is None:
            return await self._run(fn)
        return await asyncio.wait_for(self._run(fn), timeout=self._timeout)

    async def _run(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    return await fn(session)
            except DBAPIError as exc:
                if is_serialization_failure(exc, self._retryable_sqlstates):
                    logger.debug("Transaction aborted by conflict (sqlstate=%s)", extract_sqlstate(exc))
                    raise TransactionConflictError(str(exc.orig)) from exc
                raise


__all__ = [
    "SERIALIZATION_FAILURE",
    "TransactionManager",
    "extract_sqlstate",
    "is_serialization_failure",
]
