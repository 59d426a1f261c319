"""Change a member's team role or remove a member."""

import logging

from tenantgate.application.ports import TeamAccessResolver
from tenantgate.domain.exceptions import InvalidTransition, NotFound, PermissionDenied, ValidationError
from tenantgate.domain.value_objects import INVITABLE_ROLES, TeamRole

logger = logging.getLogger(__name__)


class ChangeMemberRoleUseCase:
    """Switch a member between ADMIN and MEMBER."""

    def __init__(
        self,
        unit_of_work_factory: type,
        team_access_resolver: TeamAccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._team_access = team_access_resolver

    async def execute(
        self, actor_id: str, team_id: str, user_id: str, role: TeamRole | str
    ) -> None:
        access = await self._team_access.resolve(actor_id, team_id)
        if not access.can_manage_members:
            raise PermissionDenied("User cannot manage members of this team")
        if not isinstance(role, str) or role not in INVITABLE_ROLES:
            # No ownership transfer.
            raise ValidationError("Member role must be ADMIN or MEMBER")

        async with self._uow_factory() as uow:
            member = await uow.team_members.get(team_id, user_id)
            if not member:
                raise NotFound("TeamMember", f"{team_id}/{user_id}")
            if member.role == TeamRole.OWNER:
                raise InvalidTransition("The team owner's role cannot be changed")
            await uow.team_members.update_role(team_id, user_id, TeamRole(role))

        logger.info("User %s set role of %s in team %s to %s", actor_id, user_id, team_id, role)


class RemoveMemberUseCase:
    """Remove a non-owner member. Only the OWNER may remove members."""

    def __init__(
        self,
        unit_of_work_factory: type,
        team_access_resolver: TeamAccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._team_access = team_access_resolver

    async def execute(self, actor_id: str, team_id: str, user_id: str) -> None:
        access = await self._team_access.resolve(actor_id, team_id)
        if not access.can_remove_members:
            raise PermissionDenied("Only the team owner can remove members")

        async with self._uow_factory() as uow:
            member = await uow.team_members.get(team_id, user_id)
            if not member:
                raise NotFound("TeamMember", f"{team_id}/{user_id}")
            if member.role == TeamRole.OWNER:
                logger.warning("Refused to remove owner %s from team %s", user_id, team_id)
                raise InvalidTransition("The team owner cannot be removed")
            await uow.team_members.remove(team_id, user_id)

        logger.info("User %s removed %s from team %s", actor_id, user_id, team_id)
