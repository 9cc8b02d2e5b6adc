"""PostgreSQL async connection pool."""

import logging

import psycopg
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 1, max_size: int = 5) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (PoolLifespanMiddleware does this on ASGI startup).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


async def ping(pool: AsyncConnectionPool) -> bool:
    """Whether the database answers a trivial query."""
    try:
        async with pool.connection() as conn:
            await conn.execute("SELECT 1")
    except (psycopg.Error, OSError) as exc:
        logger.warning("Database ping failed: %s", exc)
        return False
    return True
