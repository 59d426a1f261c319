"""Permission repository port."""

from collections.abc import Iterable
from typing import Protocol

from tenantgate.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission reference data."""

    async def get_by_id(self, permission_id: str) -> Permission | None: ...

    async def list_all(self) -> list[Permission]: ...

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]: ...
