"""Role repository port."""

from typing import Protocol

from tenantgate.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence.

    delete() raises Conflict while any user references the role.
    """

    async def get_by_id(self, role_id: str) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_all(self) -> list[Role]: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def delete(self, role_id: str) -> None: ...
