"""Lifespan middleware - opens the pool on startup, releases resources on shutdown."""

from collections.abc import Awaitable, Callable
from typing import Any

from psycopg_pool import AsyncConnectionPool


class PoolLifespanMiddleware:
    """Opens the connection pool on startup; closes it and extra closers on shutdown."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        closers: list[Callable[[], Awaitable[None]]] | None = None,
    ) -> None:
        self._pool = pool
        self._closers = closers or []

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.open()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        for closer in self._closers:
            await closer()
        await self._pool.close()
