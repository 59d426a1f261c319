"""Team access resolver - a user's role and gates inside a team."""

from tenantgate.domain.entities import Team
from tenantgate.domain.policies import TeamAccess
from tenantgate.domain.value_objects import TeamRole


class MembershipTeamAccessResolver:
    """Resolves team access from TeamMember rows."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def user_role_in_team(self, user_id: str, team_id: str | None) -> TeamRole | None:
        """Role of user in team, or None if not a member (or no team given)."""
        if not user_id or not team_id:
            return None
        async with self._uow_factory() as uow:
            member = await uow.team_members.get(team_id, user_id)
        return member.role if member else None

    async def resolve(self, user_id: str, team_id: str | None) -> TeamAccess:
        """Team access gates for user in team."""
        role = await self.user_role_in_team(user_id, team_id)
        return TeamAccess(team_id=team_id or "", role=role)

    async def list_user_teams(self, user_id: str) -> list[Team]:
        """Teams user is a member of."""
        async with self._uow_factory() as uow:
            return await uow.teams.list_for_user(user_id)

    async def select_current_team(self, user_id: str, requested_team_id: str | None) -> Team | None:
        """Requested team if user belongs to it, else user's first team, else None."""
        teams = await self.list_user_teams(user_id)
        if requested_team_id:
            for team in teams:
                if team.id == requested_team_id:
                    return team
        return teams[0] if teams else None
