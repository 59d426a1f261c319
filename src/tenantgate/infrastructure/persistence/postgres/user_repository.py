"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from tenantgate.domain.entities import User

_COLUMNS = "id, full_name, email, role_id, plan_id, created_at, updated_at, credential_ref"


def _row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        full_name=r[1],
        email=r[2],
        role_id=r[3],
        plan_id=r[4],
        created_at=r[5],
        updated_at=r[6],
        credential_ref=r[7],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email, ignoring case."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE lower(email) = lower(%s)",
            (email,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def list_all(self) -> list[User]:
        """List all users."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM app_user ORDER BY created_at")
        rows = await cur.fetchall()
        return [_row_to_user(r) for r in rows]

    async def create(self, user: User) -> User:
        """Insert user."""
        await self._conn.execute(
            f"INSERT INTO app_user ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                user.id,
                user.full_name,
                user.email,
                user.role_id,
                user.plan_id,
                user.created_at,
                user.updated_at,
                user.credential_ref,
            ),
        )
        return user

    async def update(self, user: User) -> None:
        """Update user."""
        await self._conn.execute(
            "UPDATE app_user SET full_name = %s, email = %s, role_id = %s, plan_id = %s, "
            "updated_at = %s, credential_ref = %s WHERE id = %s",
            (
                user.full_name,
                user.email,
                user.role_id,
                user.plan_id,
                user.updated_at,
                user.credential_ref,
                user.id,
            ),
        )
