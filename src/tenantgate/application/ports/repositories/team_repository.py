"""Team, membership and invitation repository ports."""

from typing import Protocol

from tenantgate.domain.entities import Team, TeamInvitation, TeamMember
from tenantgate.domain.value_objects import InvitationStatus, TeamRole


class TeamRepository(Protocol):
    """Port for team persistence."""

    async def get_by_id(self, team_id: str) -> Team | None: ...

    async def list_all(self) -> list[Team]: ...

    async def list_for_user(self, user_id: str) -> list[Team]: ...

    async def create(self, team: Team) -> Team: ...


class TeamMemberRepository(Protocol):
    """Port for team membership.

    update_role() and remove() raise InvalidTransition for the team OWNER.
    """

    async def get(self, team_id: str, user_id: str) -> TeamMember | None: ...

    async def list_by_team(self, team_id: str) -> list[TeamMember]: ...

    async def add(self, member: TeamMember) -> TeamMember: ...

    async def update_role(self, team_id: str, user_id: str, role: TeamRole) -> None: ...

    async def remove(self, team_id: str, user_id: str) -> None: ...


class TeamInvitationRepository(Protocol):
    """Port for team invitations.

    update_status() raises InvalidTransition unless the invitation is PENDING.
    """

    async def get_by_id(self, invitation_id: str) -> TeamInvitation | None: ...

    async def list_by_team(
        self, team_id: str, status: InvitationStatus | None = None
    ) -> list[TeamInvitation]: ...

    async def get_pending(self, team_id: str, email: str) -> TeamInvitation | None: ...

    async def create(self, invitation: TeamInvitation) -> TeamInvitation: ...

    async def update_status(self, invitation_id: str, status: InvitationStatus) -> None: ...
