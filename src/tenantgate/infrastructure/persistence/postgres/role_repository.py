"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection, errors

from tenantgate.domain.entities import Role
from tenantgate.domain.exceptions import Conflict

_SELECT = (
    "SELECT r.id, r.name, r.description, r.color, "
    "coalesce(array_agg(rp.permission_id) FILTER (WHERE rp.permission_id IS NOT NULL), '{}') "
    "FROM role r LEFT JOIN role_permission rp ON rp.role_id = r.id"
)


def _row_to_role(r: tuple) -> Role:
    return Role(id=r[0], name=r[1], description=r[2] or "", color=r[3], permission_ids=set(r[4]))


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name, ignoring case."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE lower(r.name) = lower(%s) GROUP BY r.id",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"{_SELECT} GROUP BY r.id ORDER BY r.name")
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def create(self, role: Role) -> Role:
        """Insert role and its permission links."""
        try:
            await self._conn.execute(
                "INSERT INTO role (id, name, description, color) VALUES (%s, %s, %s, %s)",
                (role.id, role.name, role.description, role.color),
            )
        except errors.UniqueViolation as e:
            raise Conflict(f"A role named '{role.name}' already exists") from e
        await self._insert_permissions(role)
        return role

    async def update(self, role: Role) -> None:
        """Update role fields and replace its permission links."""
        try:
            await self._conn.execute(
                "UPDATE role SET name = %s, description = %s, color = %s WHERE id = %s",
                (role.name, role.description, role.color, role.id),
            )
        except errors.UniqueViolation as e:
            raise Conflict(f"A role named '{role.name}' already exists") from e
        await self._conn.execute("DELETE FROM role_permission WHERE role_id = %s", (role.id,))
        await self._insert_permissions(role)

    async def delete(self, role_id: str) -> None:
        """Delete role unless a user references it.

        The role row is locked first so a concurrent assignment cannot slip
        in between the check and the delete.
        """
        await self._conn.execute("SELECT id FROM role WHERE id = %s FOR UPDATE", (role_id,))
        cur = await self._conn.execute(
            "SELECT count(*) FROM app_user WHERE role_id = %s",
            (role_id,),
        )
        (in_use,) = await cur.fetchone()
        if in_use:
            raise Conflict(
                f"Cannot delete role: {in_use} user(s) are still assigned to it"
            )
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))

    async def _insert_permissions(self, role: Role) -> None:
        if not role.permission_ids:
            return
        cur = self._conn.cursor()
        await cur.executemany(
            "INSERT INTO role_permission (role_id, permission_id) VALUES (%s, %s)",
            [(role.id, pid) for pid in sorted(role.permission_ids)],
        )
