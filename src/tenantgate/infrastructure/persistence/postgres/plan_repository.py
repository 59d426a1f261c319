"""PostgreSQL plan repository implementation."""

from collections.abc import Iterable

from psycopg import AsyncConnection

from tenantgate.domain.entities import Feature, Limit, Plan, PlanLimit
from tenantgate.domain.exceptions import Conflict


def _row_to_plan(r: tuple) -> Plan:
    return Plan(id=r[0], name=r[1], price=float(r[2]), price_description=r[3], description=r[4])


class PostgresPlanRepository:
    """Plan repository implementation with feature and limit associations."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, plan_id: str) -> Plan | None:
        """Get plan by id."""
        cur = await self._conn.execute(
            "SELECT id, name, price, price_description, description FROM plan WHERE id = %s",
            (plan_id,),
        )
        r = await cur.fetchone()
        return _row_to_plan(r) if r else None

    async def list_all(self) -> list[Plan]:
        """List plans by price."""
        cur = await self._conn.execute(
            "SELECT id, name, price, price_description, description FROM plan ORDER BY price, name"
        )
        rows = await cur.fetchall()
        return [_row_to_plan(r) for r in rows]

    async def create(self, plan: Plan) -> Plan:
        """Insert plan."""
        await self._conn.execute(
            "INSERT INTO plan (id, name, price, price_description, description) "
            "VALUES (%s, %s, %s, %s, %s)",
            (plan.id, plan.name, plan.price, plan.price_description, plan.description),
        )
        return plan

    async def update(self, plan: Plan) -> None:
        """Update plan fields."""
        await self._conn.execute(
            "UPDATE plan SET name = %s, price = %s, price_description = %s, description = %s "
            "WHERE id = %s",
            (plan.name, plan.price, plan.price_description, plan.description, plan.id),
        )

    async def delete(self, plan_id: str) -> None:
        """Delete plan unless a user is subscribed to it."""
        await self._conn.execute("SELECT id FROM plan WHERE id = %s FOR UPDATE", (plan_id,))
        cur = await self._conn.execute(
            "SELECT count(*) FROM app_user WHERE plan_id = %s",
            (plan_id,),
        )
        (in_use,) = await cur.fetchone()
        if in_use:
            raise Conflict(f"Cannot delete plan: {in_use} user(s) are still subscribed to it")
        await self._conn.execute("DELETE FROM plan WHERE id = %s", (plan_id,))

    async def list_features(self, plan_id: str) -> list[Feature]:
        """Features enabled for plan."""
        cur = await self._conn.execute(
            "SELECT f.id, f.key, f.name, f.description FROM feature f "
            "JOIN plan_feature pf ON pf.feature_id = f.id WHERE pf.plan_id = %s ORDER BY f.key",
            (plan_id,),
        )
        rows = await cur.fetchall()
        return [Feature(id=r[0], key=r[1], name=r[2], description=r[3] or "") for r in rows]

    async def list_limits(self, plan_id: str) -> list[tuple[Limit, PlanLimit]]:
        """Limit definitions with the plan's value for each."""
        cur = await self._conn.execute(
            "SELECT l.id, l.key, l.name, l.description, pl.value FROM usage_limit l "
            "JOIN plan_limit pl ON pl.limit_id = l.id WHERE pl.plan_id = %s ORDER BY l.key",
            (plan_id,),
        )
        rows = await cur.fetchall()
        return [
            (
                Limit(id=r[0], key=r[1], name=r[2], description=r[3] or ""),
                PlanLimit(plan_id=plan_id, limit_id=r[0], value=r[4]),
            )
            for r in rows
        ]

    async def replace_features(self, plan_id: str, feature_ids: Iterable[str]) -> None:
        """Replace the plan's feature set."""
        await self._conn.execute("DELETE FROM plan_feature WHERE plan_id = %s", (plan_id,))
        rows = [(plan_id, fid) for fid in sorted(set(feature_ids))]
        if rows:
            cur = self._conn.cursor()
            await cur.executemany(
                "INSERT INTO plan_feature (plan_id, feature_id) VALUES (%s, %s)",
                rows,
            )

    async def replace_limits(self, plan_id: str, limits: Iterable[PlanLimit]) -> None:
        """Replace the plan's limit values."""
        await self._conn.execute("DELETE FROM plan_limit WHERE plan_id = %s", (plan_id,))
        rows = [(plan_id, pl.limit_id, pl.value) for pl in limits]
        if rows:
            cur = self._conn.cursor()
            await cur.executemany(
                "INSERT INTO plan_limit (plan_id, limit_id, value) VALUES (%s, %s, %s)",
                rows,
            )
