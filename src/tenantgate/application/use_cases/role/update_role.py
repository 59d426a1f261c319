"""Update role use case."""

import logging

from tenantgate.application.dto.role_dto import RoleUpdate
from tenantgate.application.ports import PermissionChecker
from tenantgate.application.use_cases.role.create_role import ensure_permissions_exist
from tenantgate.domain.entities import Role
from tenantgate.domain.exceptions import Conflict, NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Rename a role or replace its permission set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, role_id: str, data: RoleUpdate) -> Role:
        if not await self._permission_checker.user_can(actor_id, Action.UPDATE, Subject.ROLE):
            raise PermissionDenied("User cannot update roles")
        data.validate()

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)

            if data.name is not None:
                name = data.name.strip()
                existing = await uow.roles.get_by_name(name)
                if existing and existing.id != role_id:
                    raise Conflict(f"A role named '{name}' already exists")
                role.name = name
            if data.description is not None:
                role.description = data.description
            if data.color is not None:
                role.color = data.color
            if data.permission_ids is not None:
                role.permission_ids = await ensure_permissions_exist(uow, data.permission_ids)

            await uow.roles.update(role)

        logger.info("Role %s updated by %s", role_id, actor_id)
        return role
