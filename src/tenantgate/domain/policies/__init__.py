"""Pure access and entitlement policies."""

from tenantgate.domain.policies.entitlements import Entitlements, PlanSnapshot
from tenantgate.domain.policies.rbac import grants, is_super_admin
from tenantgate.domain.policies.team_access import TeamAccess
from tenantgate.domain.policies.tenancy import TeamOwned, scope_to_team

__all__ = [
    "Entitlements",
    "PlanSnapshot",
    "TeamAccess",
    "TeamOwned",
    "grants",
    "is_super_admin",
    "scope_to_team",
]
