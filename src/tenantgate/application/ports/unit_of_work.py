"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from tenantgate.application.ports.repositories import (
    FeatureRepository,
    LimitRepository,
    PermissionRepository,
    PlanRepository,
    ProductRepository,
    RoleRepository,
    TeamInvitationRepository,
    TeamMemberRepository,
    TeamRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def plans(self) -> PlanRepository: ...

    @property
    def features(self) -> FeatureRepository: ...

    @property
    def limits(self) -> LimitRepository: ...

    @property
    def teams(self) -> TeamRepository: ...

    @property
    def team_members(self) -> TeamMemberRepository: ...

    @property
    def invitations(self) -> TeamInvitationRepository: ...

    @property
    def products(self) -> ProductRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
