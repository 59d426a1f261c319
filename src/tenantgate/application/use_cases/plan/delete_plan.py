"""Delete plan use case."""

import logging

from tenantgate.application.ports import PermissionChecker
from tenantgate.domain.exceptions import Conflict, NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class DeletePlanUseCase:
    """Delete a plan no user is subscribed to."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, plan_id: str) -> None:
        """Delete plan and its associations. Raises Conflict while users are on it."""
        if not await self._permission_checker.user_can(actor_id, Action.DELETE, Subject.PLAN):
            raise PermissionDenied("User cannot delete plans")

        async with self._uow_factory() as uow:
            if not await uow.plans.get_by_id(plan_id):
                raise NotFound("Plan", plan_id)
            try:
                await uow.plans.delete(plan_id)
            except Conflict as e:
                logger.warning("Refused to delete plan %s: %s", plan_id, e)
                raise

        logger.info("Plan %s deleted by %s", plan_id, actor_id)
