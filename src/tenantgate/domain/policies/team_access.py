"""Team-scoped capability gates derived from a member's team role."""

from dataclasses import dataclass

from tenantgate.domain.value_objects import TeamRole


@dataclass(frozen=True)
class TeamAccess:
    """Caller's standing in one team. role is None for non-members."""

    team_id: str
    role: TeamRole | None = None

    @property
    def is_member(self) -> bool:
        return self.role is not None

    @property
    def is_owner(self) -> bool:
        return self.role == TeamRole.OWNER

    @property
    def is_admin(self) -> bool:
        # Owners are admins too.
        return self.role in (TeamRole.ADMIN, TeamRole.OWNER)

    @property
    def can_invite_members(self) -> bool:
        return self.is_admin

    @property
    def can_manage_members(self) -> bool:
        return self.is_admin

    @property
    def can_remove_members(self) -> bool:
        return self.is_owner

    def has_access(self, required_role: TeamRole | None = None) -> bool:
        """Any membership if required_role is None; otherwise OWNER or an exact match."""
        if self.role is None:
            return False
        if required_role is None:
            return True
        return self.role == TeamRole.OWNER or self.role == required_role
