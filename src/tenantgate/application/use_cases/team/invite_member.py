"""Invite member use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantgate.application.ports import TeamAccessResolver
from tenantgate.application.use_cases.user.register_user import validate_email
from tenantgate.domain.entities import TeamInvitation
from tenantgate.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from tenantgate.domain.value_objects import INVITABLE_ROLES, InvitationStatus, TeamRole

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """Create a PENDING invitation. Actor must be ADMIN or OWNER of the team."""

    def __init__(
        self,
        unit_of_work_factory: type,
        team_access_resolver: TeamAccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._team_access = team_access_resolver

    async def execute(
        self,
        actor_id: str,
        team_id: str,
        email: str,
        role: TeamRole | str = TeamRole.MEMBER,
    ) -> TeamInvitation:
        access = await self._team_access.resolve(actor_id, team_id)
        if not access.can_invite_members:
            raise PermissionDenied("User cannot invite members to this team")
        if not isinstance(role, str) or role not in INVITABLE_ROLES:
            raise ValidationError("Invitations can only propose ADMIN or MEMBER")
        email = validate_email(email)

        async with self._uow_factory() as uow:
            if not await uow.teams.get_by_id(team_id):
                raise NotFound("Team", team_id)
            if await uow.invitations.get_pending(team_id, email):
                raise Conflict(f"{email} already has a pending invitation")
            invitee = await uow.users.get_by_email(email)
            if invitee and await uow.team_members.get(team_id, invitee.id):
                raise Conflict(f"{email} is already a member of this team")

            invitation = TeamInvitation(
                id=str(uuid4()),
                team_id=team_id,
                email=email,
                role=TeamRole(role),
                status=InvitationStatus.PENDING,
                created_at=datetime.now(UTC),
                invited_by=actor_id,
            )
            await uow.invitations.create(invitation)

        logger.info("User %s invited %s to team %s as %s", actor_id, email, team_id, role)
        return invitation
