"""Repository protocol for identities."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from .models import Identity


class IdentityRepository(Protocol):
    async def get_by_id(self, identity_id: str, *, include_account: bool = False) -> Identity | None:
        ...

    async def get_by_username(self, username: str, *, include_account: bool = False) -> Identity | None:
        ...

    async def create(self, *, username: str) -> Identity:
        ...


class IdentityResolver(Protocol):
    """Resolves transfer participants inside the caller's session."""

    async def resolve_by_id(self, identity_id: str, session: AsyncSession) -> Identity:
        ...

    async def resolve_by_handle(
        self,
        handle: str,
        session: AsyncSession,
        include_account: bool = False,
    ) -> Identity | None:
        ...
