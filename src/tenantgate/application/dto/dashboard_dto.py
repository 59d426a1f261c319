"""Admin dashboard DTOs."""

from dataclasses import dataclass, field


@dataclass
class PlanUsage:
    """Users on one plan."""

    plan_id: str
    plan_name: str
    users: int
    revenue: float


@dataclass
class DashboardStats:
    """Aggregate platform statistics."""

    total_users: int
    total_teams: int
    monthly_revenue: float
    plan_distribution: list[PlanUsage] = field(default_factory=list)
