"""Resource categories permissions apply to."""

from enum import StrEnum


class Subject(StrEnum):
    """Known permission subjects. ALL is the wildcard used by the super-admin rule."""

    ALL = "all"
    PRODUCT = "Product"
    ROLE = "Role"
    PERMISSION = "Permission"
    USER = "User"
    PLAN = "Plan"
    TEAM = "Team"
