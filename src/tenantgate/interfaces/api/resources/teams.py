"""Team API resources - teams, members, invitations."""

import falcon
import falcon.asgi

from tenantgate.application.ports import TeamAccessResolver
from tenantgate.application.use_cases.team.create_team import CreateTeamUseCase
from tenantgate.application.use_cases.team.invite_member import InviteMemberUseCase
from tenantgate.application.use_cases.team.manage_members import (
    ChangeMemberRoleUseCase,
    RemoveMemberUseCase,
)
from tenantgate.application.use_cases.team.respond_to_invitation import (
    RespondToInvitationUseCase,
)
from tenantgate.domain.entities import Team, TeamInvitation
from tenantgate.domain.exceptions import PermissionDenied, ValidationError
from tenantgate.domain.policies import TeamAccess
from tenantgate.domain.value_objects import InvitationStatus, TeamRole
from tenantgate.interfaces.api.request import (
    current_team_id,
    read_body,
    require_field,
    require_user,
)


def _serialize_team(team: Team) -> dict:
    return {
        "id": team.id,
        "name": team.name,
        "owner_id": team.owner_id,
        "created_at": team.created_at.isoformat(),
        "updated_at": team.updated_at.isoformat(),
    }


def _serialize_access(access: TeamAccess) -> dict:
    return {
        "team_id": access.team_id,
        "role": access.role.value if access.role else None,
        "can_invite_members": access.can_invite_members,
        "can_manage_members": access.can_manage_members,
        "can_remove_members": access.can_remove_members,
    }


def _serialize_invitation(invitation: TeamInvitation) -> dict:
    return {
        "id": invitation.id,
        "team_id": invitation.team_id,
        "email": invitation.email,
        "role": invitation.role.value,
        "status": invitation.status.value,
        "created_at": invitation.created_at.isoformat(),
    }


class TeamsResource:
    """GET/POST /v1/teams - caller's teams (with current selection) and team creation."""

    def __init__(self, team_access_resolver: TeamAccessResolver, create_team: CreateTeamUseCase) -> None:
        self._team_access = team_access_resolver
        self._create = create_team

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        teams = await self._team_access.list_user_teams(user.user_id)
        current = await self._team_access.select_current_team(user.user_id, current_team_id(req))
        resp.media = {
            "items": [_serialize_team(t) for t in teams],
            "current_team_id": current.id if current else None,
            "requires_team": not teams,
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        body = await read_body(req)
        team = await self._create.execute(user.user_id, require_field(body, "name"))
        resp.media = _serialize_team(team)
        resp.status = falcon.HTTP_201


class TeamAccessResource:
    """GET /v1/teams/{team_id}/access - caller's team role and gates."""

    def __init__(self, team_access_resolver: TeamAccessResolver) -> None:
        self._team_access = team_access_resolver

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        user = require_user(req)
        access = await self._team_access.resolve(user.user_id, team_id)
        resp.media = _serialize_access(access)
        resp.status = falcon.HTTP_200


class TeamMembersResource:
    """GET /v1/teams/{team_id}/members - visible to members only."""

    def __init__(self, unit_of_work_factory: type, team_access_resolver: TeamAccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._team_access = team_access_resolver

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        user = require_user(req)
        access = await self._team_access.resolve(user.user_id, team_id)
        if not access.is_member:
            raise PermissionDenied("User is not a member of this team")

        async with self._uow_factory() as uow:
            members = await uow.team_members.list_by_team(team_id)
            items = []
            for m in members:
                member_user = await uow.users.get_by_id(m.user_id)
                items.append({
                    "user_id": m.user_id,
                    "full_name": member_user.full_name if member_user else None,
                    "email": member_user.email if member_user else None,
                    "role": m.role.value,
                    "joined_at": m.joined_at.isoformat(),
                })

        resp.media = {"items": items, "access": _serialize_access(access)}
        resp.status = falcon.HTTP_200


class TeamMemberResource:
    """PATCH/DELETE /v1/teams/{team_id}/members/{user_id}."""

    def __init__(
        self,
        change_member_role: ChangeMemberRoleUseCase,
        remove_member: RemoveMemberUseCase,
    ) -> None:
        self._change_role = change_member_role
        self._remove = remove_member

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str, user_id: str
    ) -> None:
        actor = require_user(req)
        body = await read_body(req)
        role = require_field(body, "role")
        await self._change_role.execute(actor.user_id, team_id, user_id, role)
        resp.media = {"team_id": team_id, "user_id": user_id, "role": role}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str, user_id: str
    ) -> None:
        actor = require_user(req)
        await self._remove.execute(actor.user_id, team_id, user_id)
        resp.status = falcon.HTTP_204


class TeamInvitationsResource:
    """GET/POST /v1/teams/{team_id}/invitations."""

    def __init__(
        self,
        unit_of_work_factory: type,
        team_access_resolver: TeamAccessResolver,
        invite_member: InviteMemberUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._team_access = team_access_resolver
        self._invite = invite_member

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        """Invitations of team; ?status= filters (default PENDING, "all" for every status)."""
        user = require_user(req)
        access = await self._team_access.resolve(user.user_id, team_id)
        if not access.can_invite_members:
            raise PermissionDenied("User cannot view invitations of this team")

        raw_status = (req.get_param("status") or InvitationStatus.PENDING.value).upper()
        try:
            status = None if raw_status == "ALL" else InvitationStatus(raw_status)
        except ValueError as e:
            raise ValidationError(f"Invalid status: {raw_status}") from e
        async with self._uow_factory() as uow:
            invitations = await uow.invitations.list_by_team(team_id, status)

        resp.media = {"items": [_serialize_invitation(i) for i in invitations]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        user = require_user(req)
        body = await read_body(req)
        invitation = await self._invite.execute(
            user.user_id,
            team_id,
            require_field(body, "email"),
            body.get("role") or TeamRole.MEMBER,
        )
        resp.media = _serialize_invitation(invitation)
        resp.status = falcon.HTTP_201


class InvitationResponseResource:
    """POST /v1/invitations/{invitation_id}/accept and /decline."""

    def __init__(self, respond_to_invitation: RespondToInvitationUseCase) -> None:
        self._respond = respond_to_invitation

    async def on_post_accept(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: str
    ) -> None:
        user = require_user(req)
        member = await self._respond.accept(user.user_id, invitation_id)
        resp.media = {
            "team_id": member.team_id,
            "user_id": member.user_id,
            "role": member.role.value,
            "status": InvitationStatus.ACCEPTED.value,
        }
        resp.status = falcon.HTTP_200

    async def on_post_decline(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: str
    ) -> None:
        user = require_user(req)
        await self._respond.decline(user.user_id, invitation_id)
        resp.media = {"id": invitation_id, "status": InvitationStatus.DECLINED.value}
        resp.status = falcon.HTTP_200
