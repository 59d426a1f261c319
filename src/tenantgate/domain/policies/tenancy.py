"""Multi-tenant scoping filter."""

from collections.abc import Iterable
from typing import Protocol, TypeVar


class TeamOwned(Protocol):
    """Any record carrying the id of the team that owns it."""

    team_id: str


T = TypeVar("T", bound=TeamOwned)


def scope_to_team(records: Iterable[T], team_id: str | None) -> list[T]:
    """Return only records owned by team_id.

    No team context means no records, never all records.
    """
    if not team_id:
        return []
    return [r for r in records if r.team_id == team_id]
