"""Permission actions for RBAC."""

from enum import StrEnum


class Action(StrEnum):
    """Actions a permission can grant.

    Plain strings are accepted wherever an Action is, so custom actions
    stay possible without extending this enum.
    """

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"
