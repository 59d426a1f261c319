"""Admin dashboard resource."""

import falcon
import falcon.asgi

from tenantgate.application.use_cases.admin.get_dashboard_stats import GetDashboardStatsUseCase
from tenantgate.interfaces.api.request import require_user


class AdminStatsResource:
    """GET /v1/admin/stats."""

    def __init__(self, get_dashboard_stats: GetDashboardStatsUseCase) -> None:
        self._get_stats = get_dashboard_stats

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        stats = await self._get_stats.execute(user.user_id)
        resp.media = {
            "total_users": stats.total_users,
            "total_teams": stats.total_teams,
            "monthly_revenue": stats.monthly_revenue,
            "plan_distribution": [
                {
                    "plan_id": d.plan_id,
                    "plan_name": d.plan_name,
                    "users": d.users,
                    "revenue": d.revenue,
                }
                for d in stats.plan_distribution
            ],
        }
        resp.status = falcon.HTTP_200
