"""Delete role use case."""

import logging

from tenantgate.application.ports import PermissionChecker
from tenantgate.domain.exceptions import Conflict, NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role that no user references."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, role_id: str) -> None:
        """Delete role. Raises Conflict while users are assigned to it."""
        if not await self._permission_checker.user_can(actor_id, Action.DELETE, Subject.ROLE):
            raise PermissionDenied("User cannot delete roles")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            try:
                await uow.roles.delete(role_id)
            except Conflict as e:
                logger.warning("Refused to delete role %s: %s", role_id, e)
                raise

        logger.info("Role %s deleted by %s", role_id, actor_id)
