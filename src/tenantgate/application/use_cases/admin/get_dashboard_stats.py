"""Admin dashboard statistics."""

from collections import Counter

from tenantgate.application.dto.dashboard_dto import DashboardStats, PlanUsage
from tenantgate.application.ports import PermissionChecker
from tenantgate.domain.exceptions import PermissionDenied
from tenantgate.domain.value_objects import Action, Subject


class GetDashboardStatsUseCase:
    """User and team totals, plan distribution and monthly revenue."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str) -> DashboardStats:
        if not await self._permission_checker.user_can(actor_id, Action.READ, Subject.USER):
            raise PermissionDenied("User cannot read platform statistics")

        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
            teams = await uow.teams.list_all()
            plans = await uow.plans.list_all()

        users_per_plan = Counter(u.plan_id for u in users)
        distribution = [
            PlanUsage(
                plan_id=p.id,
                plan_name=p.name,
                users=users_per_plan.get(p.id, 0),
                revenue=users_per_plan.get(p.id, 0) * p.price,
            )
            for p in plans
        ]
        return DashboardStats(
            total_users=len(users),
            total_teams=len(teams),
            monthly_revenue=sum(d.revenue for d in distribution),
            plan_distribution=distribution,
        )
