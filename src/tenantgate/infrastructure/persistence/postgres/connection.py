"""PostgreSQL async connection pool."""

import logging

import psycopg
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 1, max_size: int = 10) -> AsyncConnectionPool:
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
    """True if a pooled connection answers SELECT 1."""
    try:
        async with pool.connection(timeout=5.0) as conn:
            cur = await conn.execute("SELECT 1")
            return (await cur.fetchone()) == (1,)
    except (psycopg.Error, TimeoutError) as e:
        logger.warning("Database readiness check failed: %s", e)
        return False
