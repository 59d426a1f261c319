"""Create plan use case."""

import logging
from uuid import uuid4

from tenantgate.application.dto.plan_dto import PlanInput, PlanLimitInput
from tenantgate.application.ports import PermissionChecker, UnitOfWork
from tenantgate.domain.entities import Plan, PlanLimit
from tenantgate.domain.exceptions import NotFound, PermissionDenied
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)


async def replace_plan_features(uow: UnitOfWork, plan_id: str, feature_ids: list[str]) -> None:
    """Replace all features of plan. Unknown feature ids raise NotFound."""
    for feature_id in feature_ids:
        if not await uow.features.get_by_id(feature_id):
            raise NotFound("Feature", feature_id)
    await uow.plans.replace_features(plan_id, set(feature_ids))


async def replace_plan_limits(uow: UnitOfWork, plan_id: str, limits: list[PlanLimitInput]) -> None:
    """Replace all limit values of plan. Unknown limit ids raise NotFound."""
    for item in limits:
        if not await uow.limits.get_by_id(item.limit_id):
            raise NotFound("Limit", item.limit_id)
    await uow.plans.replace_limits(
        plan_id,
        [PlanLimit(plan_id=plan_id, limit_id=i.limit_id, value=i.value) for i in limits],
    )


class CreatePlanUseCase:
    """Create a plan together with its feature and limit associations."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, data: PlanInput) -> Plan:
        if not await self._permission_checker.user_can(actor_id, Action.CREATE, Subject.PLAN):
            raise PermissionDenied("User cannot create plans")
        data.validate()

        async with self._uow_factory() as uow:
            plan = Plan(
                id=str(uuid4()),
                name=data.name.strip(),
                price=data.price,
                price_description=data.price_description.strip(),
                description=data.description,
            )
            await uow.plans.create(plan)
            if data.feature_ids is not None:
                await replace_plan_features(uow, plan.id, data.feature_ids)
            if data.limits is not None:
                await replace_plan_limits(uow, plan.id, data.limits)

        logger.info("Plan %s (%s) created by %s", plan.name, plan.id, actor_id)
        return plan
