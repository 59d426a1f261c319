"""Application ports - interfaces for external adapters."""

from tenantgate.application.ports.entitlement_checker import EntitlementChecker
from tenantgate.application.ports.permission_checker import PermissionChecker
from tenantgate.application.ports.team_access_resolver import TeamAccessResolver
from tenantgate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "EntitlementChecker",
    "PermissionChecker",
    "TeamAccessResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
