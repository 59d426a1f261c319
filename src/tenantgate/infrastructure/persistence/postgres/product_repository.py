"""PostgreSQL product repository implementation."""

from psycopg import AsyncConnection

from tenantgate.domain.entities import Product
from tenantgate.domain.value_objects import ProductStatus

_COLUMNS = "id, team_id, name, description, status, created_at, updated_at, created_by"


def _row_to_product(r: tuple) -> Product:
    return Product(
        id=r[0],
        team_id=r[1],
        name=r[2],
        description=r[3],
        status=ProductStatus(r[4]),
        created_at=r[5],
        updated_at=r[6],
        created_by=r[7],
    )


class PostgresProductRepository:
    """Product repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM product WHERE id = %s",
            (product_id,),
        )
        r = await cur.fetchone()
        return _row_to_product(r) if r else None

    async def list_by_team(self, team_id: str) -> list[Product]:
        """Products of team, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM product WHERE team_id = %s ORDER BY created_at DESC",
            (team_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_product(r) for r in rows]

    async def count_by_team(self, team_id: str) -> int:
        """Count products of team.

        Locks the team row so concurrent creates cannot both pass a quota check.
        """
        await self._conn.execute("SELECT id FROM team WHERE id = %s FOR UPDATE", (team_id,))
        cur = await self._conn.execute(
            "SELECT count(*) FROM product WHERE team_id = %s",
            (team_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def create(self, product: Product) -> Product:
        """Insert product."""
        await self._conn.execute(
            f"INSERT INTO product ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                product.id,
                product.team_id,
                product.name,
                product.description,
                ProductStatus(product.status).value,
                product.created_at,
                product.updated_at,
                product.created_by,
            ),
        )
        return product

    async def update(self, product: Product) -> None:
        """Update product fields."""
        await self._conn.execute(
            "UPDATE product SET name = %s, description = %s, status = %s, updated_at = %s "
            "WHERE id = %s",
            (
                product.name,
                product.description,
                ProductStatus(product.status).value,
                product.updated_at,
                product.id,
            ),
        )

    async def delete(self, product_id: str) -> None:
        """Delete product."""
        await self._conn.execute("DELETE FROM product WHERE id = %s", (product_id,))
