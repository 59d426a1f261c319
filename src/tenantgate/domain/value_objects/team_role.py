"""Roles a user can hold inside a team."""

from enum import StrEnum


class TeamRole(StrEnum):
    """Team-scoped role, independent of the global RBAC role."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


INVITABLE_ROLES = frozenset({TeamRole.ADMIN, TeamRole.MEMBER})
