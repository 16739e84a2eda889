# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""Protocol definitions for database sessions.

Tools never touch asyncpg directly. They ask a ``ProtocolDbSessionFactory``
for a scoped session, run one primary statement plus bounded follow-ups on
it, and rely on the factory to release the connection on every exit path.

Implementations:
    - ``DbHandler`` (asyncpg pool, production)
    - ``FakeDatabase`` in ``tests.helpers`` (deterministic, in-memory)

Example Usage:
    ```python
    async with db.session(correlation_id) as session:
        result = await session.fetch(compiled.sql, compiled.params)
        print(result.row_count, result.fields)
    ```

Error Handling:
    Implementations should raise RuntimeHostError subclasses on failure:
    - InfraConnectionError: Database unavailable or connection lost
    - InfraTimeoutError: Statement exceeded the configured timeout
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from hera_infra.models import ModelQueryResult

__all__ = ["ProtocolDbSession", "ProtocolDbSessionFactory"]


@runtime_checkable
class ProtocolDbSession(Protocol):
    """One acquired connection, valid only inside its ``session()`` block."""

    async def fetch(
        self, sql: str, params: Sequence[object] = ()
    ) -> ModelQueryResult:
        """Run a single SELECT and return JSON-safe rows with their field list."""
        ...

    async def fetchval(self, sql: str, params: Sequence[object] = ()) -> object:
        """Run a single statement and return the first column of the first row."""
        ...


@runtime_checkable
class ProtocolDbSessionFactory(Protocol):
    """Source of scoped database sessions."""

    def session(
        self, correlation_id: UUID | None = None
    ) -> AbstractAsyncContextManager[ProtocolDbSession]:
        """Acquire a connection for the duration of an ``async with`` block."""
        ...
