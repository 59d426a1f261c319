"""PostgreSQL team, membership and invitation repositories."""

from psycopg import AsyncConnection

from tenantgate.domain.entities import Team, TeamInvitation, TeamMember
from tenantgate.domain.exceptions import InvalidTransition, NotFound
from tenantgate.domain.value_objects import InvitationStatus, TeamRole

_INVITATION_COLUMNS = "id, team_id, email, role, status, created_at, invited_by"


def _row_to_team(r: tuple) -> Team:
    return Team(id=r[0], name=r[1], owner_id=r[2], created_at=r[3], updated_at=r[4])


def _row_to_invitation(r: tuple) -> TeamInvitation:
    return TeamInvitation(
        id=r[0],
        team_id=r[1],
        email=r[2],
        role=TeamRole(r[3]),
        status=InvitationStatus(r[4]),
        created_at=r[5],
        invited_by=r[6],
    )


class PostgresTeamRepository:
    """Team repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, team_id: str) -> Team | None:
        """Get team by id."""
        cur = await self._conn.execute(
            "SELECT id, name, owner_id, created_at, updated_at FROM team WHERE id = %s",
            (team_id,),
        )
        r = await cur.fetchone()
        return _row_to_team(r) if r else None

    async def list_all(self) -> list[Team]:
        """List all teams."""
        cur = await self._conn.execute(
            "SELECT id, name, owner_id, created_at, updated_at FROM team ORDER BY created_at"
        )
        rows = await cur.fetchall()
        return [_row_to_team(r) for r in rows]

    async def list_for_user(self, user_id: str) -> list[Team]:
        """Teams where user is a member, oldest membership first."""
        cur = await self._conn.execute(
            "SELECT t.id, t.name, t.owner_id, t.created_at, t.updated_at FROM team t "
            "JOIN team_member m ON m.team_id = t.id WHERE m.user_id = %s ORDER BY m.joined_at",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_team(r) for r in rows]

    async def create(self, team: Team) -> Team:
        """Insert team."""
        await self._conn.execute(
            "INSERT INTO team (id, name, owner_id, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            (team.id, team.name, team.owner_id, team.created_at, team.updated_at),
        )
        return team


class PostgresTeamMemberRepository:
    """Team membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, team_id: str, user_id: str) -> TeamMember | None:
        """Get membership of user in team."""
        cur = await self._conn.execute(
            "SELECT team_id, user_id, role, joined_at FROM team_member "
            "WHERE team_id = %s AND user_id = %s",
            (team_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return TeamMember(team_id=r[0], user_id=r[1], role=TeamRole(r[2]), joined_at=r[3])

    async def list_by_team(self, team_id: str) -> list[TeamMember]:
        """Members of team."""
        cur = await self._conn.execute(
            "SELECT team_id, user_id, role, joined_at FROM team_member "
            "WHERE team_id = %s ORDER BY joined_at",
            (team_id,),
        )
        rows = await cur.fetchall()
        return [
            TeamMember(team_id=r[0], user_id=r[1], role=TeamRole(r[2]), joined_at=r[3])
            for r in rows
        ]

    async def add(self, member: TeamMember) -> TeamMember:
        """Insert membership."""
        await self._conn.execute(
            "INSERT INTO team_member (team_id, user_id, role, joined_at) VALUES (%s, %s, %s, %s)",
            (member.team_id, member.user_id, member.role.value, member.joined_at),
        )
        return member

    async def update_role(self, team_id: str, user_id: str, role: TeamRole) -> None:
        """Change a non-owner member's role."""
        if role == TeamRole.OWNER:
            raise InvalidTransition("Ownership cannot be granted through a role change")
        current = await self._lock_member(team_id, user_id)
        if current == TeamRole.OWNER:
            raise InvalidTransition("The team owner's role cannot be changed")
        await self._conn.execute(
            "UPDATE team_member SET role = %s WHERE team_id = %s AND user_id = %s",
            (role.value, team_id, user_id),
        )

    async def remove(self, team_id: str, user_id: str) -> None:
        """Delete a non-owner membership."""
        current = await self._lock_member(team_id, user_id)
        if current == TeamRole.OWNER:
            raise InvalidTransition("The team owner cannot be removed")
        await self._conn.execute(
            "DELETE FROM team_member WHERE team_id = %s AND user_id = %s",
            (team_id, user_id),
        )

    async def _lock_member(self, team_id: str, user_id: str) -> TeamRole:
        cur = await self._conn.execute(
            "SELECT role FROM team_member WHERE team_id = %s AND user_id = %s FOR UPDATE",
            (team_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            raise NotFound("TeamMember", f"{team_id}/{user_id}")
        return TeamRole(r[0])


class PostgresTeamInvitationRepository:
    """Team invitation repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, invitation_id: str) -> TeamInvitation | None:
        """Get invitation by id."""
        cur = await self._conn.execute(
            f"SELECT {_INVITATION_COLUMNS} FROM team_invitation WHERE id = %s",
            (invitation_id,),
        )
        r = await cur.fetchone()
        return _row_to_invitation(r) if r else None

    async def list_by_team(
        self, team_id: str, status: InvitationStatus | None = None
    ) -> list[TeamInvitation]:
        """Invitations of team, optionally filtered by status."""
        if status is None:
            cur = await self._conn.execute(
                f"SELECT {_INVITATION_COLUMNS} FROM team_invitation "
                "WHERE team_id = %s ORDER BY created_at",
                (team_id,),
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_INVITATION_COLUMNS} FROM team_invitation "
                "WHERE team_id = %s AND status = %s ORDER BY created_at",
                (team_id, status.value),
            )
        rows = await cur.fetchall()
        return [_row_to_invitation(r) for r in rows]

    async def get_pending(self, team_id: str, email: str) -> TeamInvitation | None:
        """Pending invitation for email in team, ignoring case."""
        cur = await self._conn.execute(
            f"SELECT {_INVITATION_COLUMNS} FROM team_invitation "
            "WHERE team_id = %s AND lower(email) = lower(%s) AND status = %s",
            (team_id, email, InvitationStatus.PENDING.value),
        )
        r = await cur.fetchone()
        return _row_to_invitation(r) if r else None

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Insert invitation."""
        await self._conn.execute(
            f"INSERT INTO team_invitation ({_INVITATION_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                invitation.id,
                invitation.team_id,
                invitation.email,
                invitation.role.value,
                invitation.status.value,
                invitation.created_at,
                invitation.invited_by,
            ),
        )
        return invitation

    async def update_status(self, invitation_id: str, status: InvitationStatus) -> None:
        """Move a PENDING invitation to status."""
        if status == InvitationStatus.PENDING:
            raise InvalidTransition("Invitations cannot return to PENDING")
        cur = await self._conn.execute(
            "UPDATE team_invitation SET status = %s WHERE id = %s AND status = %s",
            (status.value, invitation_id, InvitationStatus.PENDING.value),
        )
        if cur.rowcount == 0:
            raise InvalidTransition(f"Invitation {invitation_id} is not pending")
