"""Plan and entitlement reference entities."""

from dataclasses import dataclass


@dataclass
class Plan:
    """Subscription plan."""

    id: str
    name: str
    price: float
    price_description: str
    description: str | None = None


@dataclass(frozen=True)
class Feature:
    """Boolean capability; plans enable it by association."""

    id: str
    key: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class Limit:
    """Numeric quota definition; the value lives on the plan association."""

    id: str
    key: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class PlanLimit:
    """Value of one limit for one plan. -1 means unlimited."""

    plan_id: str
    limit_id: str
    value: int
