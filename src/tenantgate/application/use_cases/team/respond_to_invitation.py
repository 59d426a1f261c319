"""Accept or decline a team invitation."""

import logging
from datetime import UTC, datetime

from tenantgate.application.ports import UnitOfWork
from tenantgate.domain.entities import TeamInvitation, TeamMember
from tenantgate.domain.exceptions import Conflict, InvalidTransition, NotFound, PermissionDenied
from tenantgate.domain.value_objects import InvitationStatus

logger = logging.getLogger(__name__)


class RespondToInvitationUseCase:
    """PENDING -> ACCEPTED or PENDING -> DECLINED, once.

    Only the invited user (matched by email, ignoring case) may respond.
    Accepting adds the membership and marks the invitation in one
    unit of work.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def accept(self, user_id: str, invitation_id: str) -> TeamMember:
        async with self._uow_factory() as uow:
            invitation = await self._load_for_invitee(uow, user_id, invitation_id)
            if await uow.team_members.get(invitation.team_id, user_id):
                raise Conflict("User is already a member of this team")

            await uow.invitations.update_status(invitation_id, InvitationStatus.ACCEPTED)
            member = TeamMember(
                team_id=invitation.team_id,
                user_id=user_id,
                role=invitation.role,
                joined_at=datetime.now(UTC),
            )
            await uow.team_members.add(member)

        logger.info("User %s joined team %s as %s", user_id, member.team_id, member.role)
        return member

    async def decline(self, user_id: str, invitation_id: str) -> None:
        async with self._uow_factory() as uow:
            await self._load_for_invitee(uow, user_id, invitation_id)
            await uow.invitations.update_status(invitation_id, InvitationStatus.DECLINED)

        logger.info("User %s declined invitation %s", user_id, invitation_id)

    async def _load_for_invitee(
        self, uow: UnitOfWork, user_id: str, invitation_id: str
    ) -> TeamInvitation:
        invitation = await uow.invitations.get_by_id(invitation_id)
        if not invitation:
            raise NotFound("Invitation", invitation_id)
        user = await uow.users.get_by_id(user_id)
        if not user:
            raise NotFound("User", user_id)
        if user.email.casefold() != invitation.email.casefold():
            raise PermissionDenied("Invitation was sent to another email")
        if invitation.status.is_terminal:
            raise InvalidTransition(f"Invitation is already {invitation.status}")
        return invitation
