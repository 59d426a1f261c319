"""Permission evaluator port - global RBAC authorization."""

from typing import Protocol

from tenantgate.domain.entities import Permission
from tenantgate.domain.value_objects import Action, Subject


class PermissionChecker(Protocol):
    """Port for checking a user's global permissions."""

    async def resolve_effective_permissions(self, user_id: str) -> list[Permission]: ...

    async def user_can(self, user_id: str, action: Action | str, subject: Subject | str) -> bool: ...
