"""Entitlement evaluator - resolves features and limits of a user's plan."""

import logging

from tenantgate.domain.policies import Entitlements

logger = logging.getLogger(__name__)


class PlanEntitlementChecker:
    """Builds an Entitlements snapshot from the user's plan associations."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def for_user(self, user_id: str) -> Entitlements:
        """Entitlements of user's plan; empty if the user or plan is missing."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id) if user_id else None
            if not user:
                logger.debug("No entitlements: user %s not found", user_id)
                return Entitlements.empty()

            plan = await uow.plans.get_by_id(user.plan_id)
            if not plan:
                logger.debug("No entitlements: plan %s of user %s not found", user.plan_id, user_id)
                return Entitlements.empty()

            features = await uow.plans.list_features(plan.id)
            limits = await uow.plans.list_limits(plan.id)

        return Entitlements.from_plan(plan, features, limits)
