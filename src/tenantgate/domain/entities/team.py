"""Team, membership and invitation entities."""

from dataclasses import dataclass
from datetime import datetime

from tenantgate.domain.value_objects import InvitationStatus, TeamRole


@dataclass
class Team:
    """Tenant. The owner is always also an OWNER member."""

    id: str
    name: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


@dataclass
class TeamMember:
    """User's membership in a team."""

    team_id: str
    user_id: str
    role: TeamRole
    joined_at: datetime


@dataclass
class TeamInvitation:
    """Invitation to join a team with a proposed (non-owner) role."""

    id: str
    team_id: str
    email: str
    role: TeamRole
    status: InvitationStatus
    created_at: datetime
    invited_by: str | None = None
