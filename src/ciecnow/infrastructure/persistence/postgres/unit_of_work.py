"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from ciecnow.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from ciecnow.infrastructure.persistence.postgres.profile_repository import (
    PostgresProfileRepository,
)
from ciecnow.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)


class PostgresUnitOfWork:
    """Access tables over one pooled connection and one transaction.

    Repositories are bound on enter. Leaving with an exception rolls back.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._lease: AbstractAsyncContextManager[AsyncConnection] | None = None
        self._conn: AsyncConnection | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._lease = self._pool.connection()
        self._conn = await self._lease.__aenter__()
        self.profiles = PostgresProfileRepository(self._conn)
        self.roles = PostgresRoleRepository(self._conn)
        self.permissions = PostgresPermissionRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        lease, self._lease = self._lease, None
        if exc_type is not None:
            await self.rollback()
        self._conn = None
        if lease is not None:
            await lease.__aexit__(exc_type, exc_val, exc_tb)

    async def commit(self) -> None:
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn is not None:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """Factory of UnitOfWork context managers; commits when the block succeeds."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool) as uow:
            yield uow
            await uow.commit()

    return factory
