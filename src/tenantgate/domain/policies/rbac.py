"""RBAC grant matching over a resolved permission set."""

from collections.abc import Iterable

from tenantgate.domain.entities import Permission
from tenantgate.domain.value_objects import Action, Subject


def is_super_admin(permissions: Iterable[Permission]) -> bool:
    """True if the set contains manage/all."""
    return any(
        p.action == Action.MANAGE and p.subject == Subject.ALL for p in permissions
    )


def grants(permissions: Iterable[Permission], action: Action | str, subject: Subject | str) -> bool:
    """Check whether permissions allow action on subject.

    Only manage/all is a universal grant. Everything else is an exact,
    case-sensitive match on both action and subject: "manage Product"
    does not imply "read Product".
    """
    permissions = list(permissions)
    if is_super_admin(permissions):
        return True
    return any(p.action == action and p.subject == subject for p in permissions)
