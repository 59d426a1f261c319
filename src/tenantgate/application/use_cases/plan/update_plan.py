"""Update plan use case."""

import logging

from tenantgate.application.dto.plan_dto import PlanUpdate
from tenantgate.application.ports import PermissionChecker
from tenantgate.application.use_cases.plan.create_plan import (
    replace_plan_features,
    replace_plan_limits,
)
from tenantgate.domain.entities import Plan
from tenantgate.domain.exceptions import NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


class UpdatePlanUseCase:
    """Update plan fields and replace its features or limits."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, plan_id: str, data: PlanUpdate) -> Plan:
        """Update plan. Associations given in data replace the existing ones, no merge."""
        if not await self._permission_checker.user_can(actor_id, Action.UPDATE, Subject.PLAN):
            raise PermissionDenied("User cannot update plans")
        data.validate()

        async with self._uow_factory() as uow:
            plan = await uow.plans.get_by_id(plan_id)
            if not plan:
                raise NotFound("Plan", plan_id)

            if data.name is not None:
                plan.name = data.name.strip()
            if data.price is not None:
                plan.price = data.price
            if data.price_description is not None:
                plan.price_description = data.price_description.strip()
            if data.description is not None:
                plan.description = data.description
            await uow.plans.update(plan)

            if data.feature_ids is not None:
                await replace_plan_features(uow, plan_id, data.feature_ids)
            if data.limits is not None:
                await replace_plan_limits(uow, plan_id, data.limits)

        logger.info("Plan %s updated by %s", plan_id, actor_id)
        return plan
