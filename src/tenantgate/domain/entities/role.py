"""Role entity for RBAC."""

from dataclasses import dataclass, field


@dataclass
class Role:
    """Role - named set of permission ids."""

    id: str
    name: str
    description: str
    color: str = "#6b7280"
    permission_ids: set[str] = field(default_factory=set)
