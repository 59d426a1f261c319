"""Create team use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantgate.application.dto.validation import clean_text
from tenantgate.domain.entities import Team, TeamMember
from tenantgate.domain.exceptions import NotFound, ValidationError
from tenantgate.domain.value_objects import TeamRole

logger = logging.getLogger(__name__)


class CreateTeamUseCase:
    """Create team and make the creator its sole OWNER."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, name: str) -> Team:
        name = clean_text(name, "name")
        if not name:
            raise ValidationError("Team name is required")

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id):
                raise NotFound("User", user_id)

            now = datetime.now(UTC)
            team = Team(
                id=str(uuid4()),
                name=name,
                owner_id=user_id,
                created_at=now,
                updated_at=now,
            )
            await uow.teams.create(team)
            await uow.team_members.add(
                TeamMember(team_id=team.id, user_id=user_id, role=TeamRole.OWNER, joined_at=now)
            )

        logger.info("Team %s (%s) created by %s", team.name, team.id, user_id)
        return team
