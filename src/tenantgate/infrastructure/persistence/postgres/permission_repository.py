"""PostgreSQL permission repository implementation."""

from collections.abc import Iterable

from psycopg import AsyncConnection

from tenantgate.domain.entities import Permission


class PostgresPermissionRepository:
    """Permission repository implementation (read-only reference data)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            "SELECT id, action, subject, name, description FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Permission(id=r[0], action=r[1], subject=r[2], name=r[3], description=r[4] or "")

    async def list_all(self) -> list[Permission]:
        """List all permissions."""
        cur = await self._conn.execute(
            "SELECT id, action, subject, name, description FROM permission ORDER BY subject, action"
        )
        rows = await cur.fetchall()
        return [
            Permission(id=r[0], action=r[1], subject=r[2], name=r[3], description=r[4] or "")
            for r in rows
        ]

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        """Permissions among permission_ids that exist."""
        ids = list(permission_ids)
        if not ids:
            return []
        cur = await self._conn.execute(
            "SELECT id, action, subject, name, description FROM permission WHERE id = ANY(%s)",
            (ids,),
        )
        rows = await cur.fetchall()
        return [
            Permission(id=r[0], action=r[1], subject=r[2], name=r[3], description=r[4] or "")
            for r in rows
        ]
