"""Repository ports."""

from tenantgate.application.ports.repositories.feature_repository import (
    FeatureRepository,
    LimitRepository,
)
from tenantgate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from tenantgate.application.ports.repositories.plan_repository import PlanRepository
from tenantgate.application.ports.repositories.product_repository import ProductRepository
from tenantgate.application.ports.repositories.role_repository import RoleRepository
from tenantgate.application.ports.repositories.team_repository import (
    TeamInvitationRepository,
    TeamMemberRepository,
    TeamRepository,
)
from tenantgate.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "FeatureRepository",
    "LimitRepository",
    "PermissionRepository",
    "PlanRepository",
    "ProductRepository",
    "RoleRepository",
    "TeamInvitationRepository",
    "TeamMemberRepository",
    "TeamRepository",
    "UserRepository",
]
