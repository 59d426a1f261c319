"""Domain value objects."""

from tenantgate.domain.value_objects.invitation_status import InvitationStatus
from tenantgate.domain.value_objects.limit_value import (
    UNLIMITED,
    is_unlimited,
    is_valid_limit_value,
    within_limit,
)
from tenantgate.domain.value_objects.permission_action import Action
from tenantgate.domain.value_objects.product_status import ProductStatus
from tenantgate.domain.value_objects.subject import Subject
from tenantgate.domain.value_objects.team_role import INVITABLE_ROLES, TeamRole

__all__ = [
    "INVITABLE_ROLES",
    "UNLIMITED",
    "Action",
    "InvitationStatus",
    "ProductStatus",
    "Subject",
    "TeamRole",
    "is_unlimited",
    "is_valid_limit_value",
    "within_limit",
]
