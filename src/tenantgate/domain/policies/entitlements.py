"""Resolved plan entitlements for one user."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from tenantgate.domain.entities import Feature, Limit, Plan, PlanLimit
from tenantgate.domain.value_objects import limit_value


@dataclass(frozen=True)
class PlanSnapshot:
    """Read-only view of the user's current plan."""

    id: str
    name: str
    price: float
    price_description: str

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanSnapshot":
        return cls(
            id=plan.id,
            name=plan.name,
            price=plan.price,
            price_description=plan.price_description,
        )


@dataclass(frozen=True)
class Entitlements:
    """Feature flags and limits of a plan.

    Missing features are disabled and missing limits are 0. Callers must go
    through within_limit (or check is_unlimited) before comparing usage
    against a limit, since -1 means unlimited.
    """

    current_plan: PlanSnapshot | None = None
    features: frozenset[str] = frozenset()
    limits: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def empty(cls) -> "Entitlements":
        """Entitlements of an unresolvable user or plan."""
        return cls()

    @classmethod
    def from_plan(
        cls,
        plan: Plan,
        features: Iterable[Feature],
        limit_values: Iterable[tuple[Limit, PlanLimit]],
    ) -> "Entitlements":
        return cls(
            current_plan=PlanSnapshot.from_plan(plan),
            features=frozenset(f.key for f in features),
            limits=MappingProxyType({limit.key: pl.value for limit, pl in limit_values}),
        )

    def can(self, feature_key: str) -> bool:
        return feature_key in self.features

    def get_limit(self, limit_key: str) -> int:
        return self.limits.get(limit_key, 0)

    def within_limit(self, limit_key: str, current_usage: int, increment: int = 1) -> bool:
        """True if usage plus increment fits the plan's limit."""
        return limit_value.within_limit(self.get_limit(limit_key), current_usage, increment)
