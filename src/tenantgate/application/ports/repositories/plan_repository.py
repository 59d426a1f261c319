"""Plan repository port."""

from collections.abc import Iterable
from typing import Protocol

from tenantgate.domain.entities import Feature, Limit, Plan, PlanLimit


class PlanRepository(Protocol):
    """Port for plans and their feature/limit associations.

    replace_features and replace_limits swap the plan's whole association
    set. delete() raises Conflict while any user is on the plan.
    """

    async def get_by_id(self, plan_id: str) -> Plan | None: ...

    async def list_all(self) -> list[Plan]: ...

    async def create(self, plan: Plan) -> Plan: ...

    async def update(self, plan: Plan) -> None: ...

    async def delete(self, plan_id: str) -> None: ...

    async def list_features(self, plan_id: str) -> list[Feature]: ...

    async def list_limits(self, plan_id: str) -> list[tuple[Limit, PlanLimit]]: ...

    async def replace_features(self, plan_id: str, feature_ids: Iterable[str]) -> None: ...

    async def replace_limits(self, plan_id: str, limits: Iterable[PlanLimit]) -> None: ...
