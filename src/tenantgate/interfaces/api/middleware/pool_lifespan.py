"""Database lifespan middleware - pool open/close around the ASGI lifespan."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool on startup and closes it on shutdown.

    An unreachable database does not abort startup: every evaluator fails
    closed, so the service only denies until the database comes back. The
    optional startup_check makes that state visible in the logs.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        startup_check: Callable[[], Awaitable[bool]] | None = None,
    ) -> None:
        self._pool = pool
        self._startup_check = startup_check

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        if self._startup_check and not await self._startup_check():
            logger.error("Database unavailable at startup; all access checks will deny")
        else:
            logger.info("Database pool open (max_size=%d)", self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool closed")
