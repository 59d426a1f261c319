"""Create role use case."""

import logging
from collections.abc import Iterable
from uuid import uuid4

from tenantgate.application.dto.role_dto import RoleInput
from tenantgate.application.ports import PermissionChecker, UnitOfWork
from tenantgate.domain.entities import Role
from tenantgate.domain.exceptions import Conflict, NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


async def ensure_permissions_exist(uow: UnitOfWork, permission_ids: Iterable[str]) -> set[str]:
    """Return permission_ids as a set, raising NotFound for any unknown id."""
    wanted = set(permission_ids)
    found = {p.id for p in await uow.permissions.list_by_ids(wanted)}
    missing = sorted(wanted - found)
    if missing:
        raise NotFound("Permission", ", ".join(missing))
    return wanted


class CreateRoleUseCase:
    """Create a role with a set of permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, data: RoleInput) -> Role:
        """Create role. Role names are unique, compared case-insensitively."""
        if not await self._permission_checker.user_can(actor_id, Action.CREATE, Subject.ROLE):
            raise PermissionDenied("User cannot create roles")
        data.validate()
        name = data.name.strip()

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise Conflict(f"A role named '{name}' already exists")

            permission_ids = await ensure_permissions_exist(uow, data.permission_ids)
            role = Role(
                id=str(uuid4()),
                name=name,
                description=data.description,
                color=data.color,
                permission_ids=permission_ids,
            )
            await uow.roles.create(role)

        logger.info("Role %s (%s) created by %s", role.name, role.id, actor_id)
        return role
