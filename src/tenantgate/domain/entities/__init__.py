"""Domain entities."""

from tenantgate.domain.entities.permission import Permission
from tenantgate.domain.entities.plan import Feature, Limit, Plan, PlanLimit
from tenantgate.domain.entities.product import Product
from tenantgate.domain.entities.role import Role
from tenantgate.domain.entities.team import Team, TeamInvitation, TeamMember
from tenantgate.domain.entities.user import User

__all__ = [
    "Feature",
    "Limit",
    "Permission",
    "Plan",
    "PlanLimit",
    "Product",
    "Role",
    "Team",
    "TeamInvitation",
    "TeamMember",
    "User",
]
