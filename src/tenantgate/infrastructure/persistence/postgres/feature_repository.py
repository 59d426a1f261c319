"""PostgreSQL feature and limit definition repositories."""

from psycopg import AsyncConnection

from tenantgate.domain.entities import Feature, Limit


class PostgresFeatureRepository:
    """Feature repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, feature_id: str) -> Feature | None:
        cur = await self._conn.execute(
            "SELECT id, key, name, description FROM feature WHERE id = %s",
            (feature_id,),
        )
        r = await cur.fetchone()
        return Feature(id=r[0], key=r[1], name=r[2], description=r[3] or "") if r else None

    async def get_by_key(self, key: str) -> Feature | None:
        cur = await self._conn.execute(
            "SELECT id, key, name, description FROM feature WHERE key = %s",
            (key,),
        )
        r = await cur.fetchone()
        return Feature(id=r[0], key=r[1], name=r[2], description=r[3] or "") if r else None

    async def list_all(self) -> list[Feature]:
        cur = await self._conn.execute("SELECT id, key, name, description FROM feature ORDER BY key")
        rows = await cur.fetchall()
        return [Feature(id=r[0], key=r[1], name=r[2], description=r[3] or "") for r in rows]


class PostgresLimitRepository:
    """Limit definition repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, limit_id: str) -> Limit | None:
        cur = await self._conn.execute(
            "SELECT id, key, name, description FROM usage_limit WHERE id = %s",
            (limit_id,),
        )
        r = await cur.fetchone()
        return Limit(id=r[0], key=r[1], name=r[2], description=r[3] or "") if r else None

    async def get_by_key(self, key: str) -> Limit | None:
        cur = await self._conn.execute(
            "SELECT id, key, name, description FROM usage_limit WHERE key = %s",
            (key,),
        )
        r = await cur.fetchone()
        return Limit(id=r[0], key=r[1], name=r[2], description=r[3] or "") if r else None

    async def list_all(self) -> list[Limit]:
        cur = await self._conn.execute(
            "SELECT id, key, name, description FROM usage_limit ORDER BY key"
        )
        rows = await cur.fetchall()
        return [Limit(id=r[0], key=r[1], name=r[2], description=r[3] or "") for r in rows]
