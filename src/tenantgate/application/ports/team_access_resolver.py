"""Team access resolver port - team-scoped roles and gates."""

from typing import Protocol

from tenantgate.domain.entities import Team
from tenantgate.domain.policies import TeamAccess
from tenantgate.domain.value_objects import TeamRole


class TeamAccessResolver(Protocol):
    """Port for resolving a user's standing within a team."""

    async def user_role_in_team(self, user_id: str, team_id: str | None) -> TeamRole | None: ...

    async def resolve(self, user_id: str, team_id: str | None) -> TeamAccess: ...

    async def list_user_teams(self, user_id: str) -> list[Team]: ...

    async def select_current_team(self, user_id: str, requested_team_id: str | None) -> Team | None: ...
