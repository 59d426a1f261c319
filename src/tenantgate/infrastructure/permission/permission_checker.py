"""Permission evaluator - resolves a user's role permissions and checks grants."""

import logging

from tenantgate.domain.entities import Permission
from tenantgate.domain.exceptions import NotFound
from tenantgate.domain.policies import grants
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class RBACPermissionChecker:
    """Checks user permissions through user -> role -> permissions."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def resolve_effective_permissions(self, user_id: str) -> list[Permission]:
        """Permissions granted by the user's role.

        Raises NotFound if the user or its role does not exist.
        """
        if not user_id:
            raise ValueError("user_id is required")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)

            role = await uow.roles.get_by_id(user.role_id)
            if not role:
                raise NotFound("Role", user.role_id)

            return await uow.permissions.list_by_ids(role.permission_ids)

    async def user_can(self, user_id: str, action: Action | str, subject: Subject | str) -> bool:
        """Check if user can perform action on subject. Unknown user or role denies."""
        try:
            permissions = await self.resolve_effective_permissions(user_id)
        except NotFound as e:
            logger.debug("Denying %s %s for user %s: %s", action, subject, user_id, e)
            return False
        return grants(permissions, action, subject)
