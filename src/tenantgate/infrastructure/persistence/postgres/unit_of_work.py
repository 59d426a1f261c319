"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from tenantgate.infrastructure.persistence.postgres.feature_repository import (
    PostgresFeatureRepository,
    PostgresLimitRepository,
)
from tenantgate.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from tenantgate.infrastructure.persistence.postgres.plan_repository import (
    PostgresPlanRepository,
)
from tenantgate.infrastructure.persistence.postgres.product_repository import (
    PostgresProductRepository,
)
from tenantgate.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from tenantgate.infrastructure.persistence.postgres.team_repository import (
    PostgresTeamInvitationRepository,
    PostgresTeamMemberRepository,
    PostgresTeamRepository,
)
from tenantgate.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._plans = PostgresPlanRepository(self._conn)
        self._features = PostgresFeatureRepository(self._conn)
        self._limits = PostgresLimitRepository(self._conn)
        self._teams = PostgresTeamRepository(self._conn)
        self._team_members = PostgresTeamMemberRepository(self._conn)
        self._invitations = PostgresTeamInvitationRepository(self._conn)
        self._products = PostgresProductRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def plans(self) -> PostgresPlanRepository:
        return self._plans

    @property
    def features(self) -> PostgresFeatureRepository:
        return self._features

    @property
    def limits(self) -> PostgresLimitRepository:
        return self._limits

    @property
    def teams(self) -> PostgresTeamRepository:
        return self._teams

    @property
    def team_members(self) -> PostgresTeamMemberRepository:
        return self._team_members

    @property
    def invitations(self) -> PostgresTeamInvitationRepository:
        return self._invitations

    @property
    def products(self) -> PostgresProductRepository:
        return self._products

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits normally and rolls back otherwise, so
    multi-step mutations (accepting an invitation, guarded deletes) are
    all-or-nothing.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
