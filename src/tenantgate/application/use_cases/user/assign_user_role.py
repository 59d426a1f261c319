"""Assign global role / change plan of a user."""

import logging
from datetime import UTC, datetime

from tenantgate.application.ports import PermissionChecker
from tenantgate.domain.entities import User
from tenantgate.domain.exceptions import NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class AssignUserRoleUseCase:
    """Replace a user's global RBAC role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, user_id: str, role_id: str) -> User:
        if not await self._permission_checker.user_can(actor_id, Action.UPDATE, Subject.USER):
            raise PermissionDenied("User cannot change user roles")

        async with self._uow_factory() as uow:
            if not await uow.roles.get_by_id(role_id):
                raise NotFound("Role", role_id)
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)

            user.role_id = role_id
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)

        logger.info("User %s assigned role %s by %s", user_id, role_id, actor_id)
        return user


class ChangeUserPlanUseCase:
    """Move a user to another subscription plan."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, user_id: str, plan_id: str) -> User:
        if not await self._permission_checker.user_can(actor_id, Action.UPDATE, Subject.USER):
            raise PermissionDenied("User cannot change user plans")

        async with self._uow_factory() as uow:
            if not await uow.plans.get_by_id(plan_id):
                raise NotFound("Plan", plan_id)
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)

            user.plan_id = plan_id
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)

        logger.info("User %s moved to plan %s by %s", user_id, plan_id, actor_id)
        return user
