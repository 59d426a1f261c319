"""Permission entity - an action on a subject."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Permission:
    """Reference data; subject "all" with action "manage" grants everything."""

    id: str
    action: str
    subject: str
    name: str
    description: str = ""
