"""Pytest fixtures for TenantGate tests."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from tenantgate.domain.entities import (
    Feature,
    Limit,
    Permission,
    Plan,
    PlanLimit,
    Product,
    Role,
    Team,
    TeamInvitation,
    TeamMember,
    User,
)
from tenantgate.domain.exceptions import Conflict, InvalidTransition, NotFound
from tenantgate.domain.value_objects import InvitationStatus, ProductStatus, TeamRole
from tenantgate.infrastructure.entitlement.entitlement_checker import PlanEntitlementChecker
from tenantgate.infrastructure.permission.permission_checker import RBACPermissionChecker
from tenantgate.infrastructure.team.team_access_resolver import MembershipTeamAccessResolver


# --- In-memory store ---


@dataclass
class InMemoryStore:
    """Every table the repositories touch, keyed by id."""

    users: dict[str, User] = field(default_factory=dict)
    roles: dict[str, Role] = field(default_factory=dict)
    permissions: dict[str, Permission] = field(default_factory=dict)
    plans: dict[str, Plan] = field(default_factory=dict)
    features: dict[str, Feature] = field(default_factory=dict)
    limits: dict[str, Limit] = field(default_factory=dict)
    plan_features: dict[str, set[str]] = field(default_factory=dict)
    plan_limits: dict[str, dict[str, int]] = field(default_factory=dict)
    teams: dict[str, Team] = field(default_factory=dict)
    members: dict[tuple[str, str], TeamMember] = field(default_factory=dict)
    invitations: dict[str, TeamInvitation] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)

    def restore(self, snapshot: InMemoryStore) -> None:
        self.__dict__.update(snapshot.__dict__)


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, user_id: str) -> User | None:
        return copy.deepcopy(self._store.users.get(user_id))

    async def get_by_email(self, email: str) -> User | None:
        for u in self._store.users.values():
            if u.email.lower() == email.lower():
                return copy.deepcopy(u)
        return None

    async def list_all(self) -> list[User]:
        return [copy.deepcopy(u) for u in self._store.users.values()]

    async def create(self, user: User) -> User:
        self._store.users[user.id] = copy.deepcopy(user)
        return user

    async def update(self, user: User) -> None:
        self._store.users[user.id] = copy.deepcopy(user)


class FakeRoleRepository:
    """In-memory role repository with the in-use delete guard."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, role_id: str) -> Role | None:
        return copy.deepcopy(self._store.roles.get(role_id))

    async def get_by_name(self, name: str) -> Role | None:
        for r in self._store.roles.values():
            if r.name.lower() == name.lower():
                return copy.deepcopy(r)
        return None

    async def list_all(self) -> list[Role]:
        return sorted(
            (copy.deepcopy(r) for r in self._store.roles.values()), key=lambda r: r.name
        )

    async def create(self, role: Role) -> Role:
        self._ensure_unique_name(role)
        self._store.roles[role.id] = copy.deepcopy(role)
        return role

    async def update(self, role: Role) -> None:
        self._ensure_unique_name(role)
        self._store.roles[role.id] = copy.deepcopy(role)

    async def delete(self, role_id: str) -> None:
        in_use = sum(1 for u in self._store.users.values() if u.role_id == role_id)
        if in_use:
            raise Conflict(f"Cannot delete role: {in_use} user(s) are still assigned to it")
        self._store.roles.pop(role_id, None)

    def _ensure_unique_name(self, role: Role) -> None:
        for other in self._store.roles.values():
            if other.id != role.id and other.name.lower() == role.name.lower():
                raise Conflict(f"A role named '{role.name}' already exists")


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, permission_id: str) -> Permission | None:
        return self._store.permissions.get(permission_id)

    async def list_all(self) -> list[Permission]:
        return list(self._store.permissions.values())

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        return [
            self._store.permissions[pid]
            for pid in permission_ids
            if pid in self._store.permissions
        ]


class FakePlanRepository:
    """In-memory plan repository with feature and limit associations."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, plan_id: str) -> Plan | None:
        return copy.deepcopy(self._store.plans.get(plan_id))

    async def list_all(self) -> list[Plan]:
        return sorted(
            (copy.deepcopy(p) for p in self._store.plans.values()),
            key=lambda p: (p.price, p.name),
        )

    async def create(self, plan: Plan) -> Plan:
        self._store.plans[plan.id] = copy.deepcopy(plan)
        return plan

    async def update(self, plan: Plan) -> None:
        self._store.plans[plan.id] = copy.deepcopy(plan)

    async def delete(self, plan_id: str) -> None:
        in_use = sum(1 for u in self._store.users.values() if u.plan_id == plan_id)
        if in_use:
            raise Conflict(f"Cannot delete plan: {in_use} user(s) are still subscribed to it")
        self._store.plans.pop(plan_id, None)
        self._store.plan_features.pop(plan_id, None)
        self._store.plan_limits.pop(plan_id, None)

    async def list_features(self, plan_id: str) -> list[Feature]:
        ids = self._store.plan_features.get(plan_id, set())
        return sorted((self._store.features[i] for i in ids), key=lambda f: f.key)

    async def list_limits(self, plan_id: str) -> list[tuple[Limit, PlanLimit]]:
        values = self._store.plan_limits.get(plan_id, {})
        rows = [
            (self._store.limits[lid], PlanLimit(plan_id=plan_id, limit_id=lid, value=v))
            for lid, v in values.items()
        ]
        return sorted(rows, key=lambda row: row[0].key)

    async def replace_features(self, plan_id: str, feature_ids: Iterable[str]) -> None:
        self._store.plan_features[plan_id] = set(feature_ids)

    async def replace_limits(self, plan_id: str, limits: Iterable[PlanLimit]) -> None:
        self._store.plan_limits[plan_id] = {pl.limit_id: pl.value for pl in limits}


class _FakeCatalogRepository:
    def __init__(self, items: dict) -> None:
        self._items = items

    async def get_by_id(self, item_id: str):
        return self._items.get(item_id)

    async def get_by_key(self, key: str):
        for item in self._items.values():
            if item.key == key:
                return item
        return None

    async def list_all(self) -> list:
        return sorted(self._items.values(), key=lambda i: i.key)


class FakeTeamRepository:
    """In-memory team repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, team_id: str) -> Team | None:
        return copy.deepcopy(self._store.teams.get(team_id))

    async def list_all(self) -> list[Team]:
        return [copy.deepcopy(t) for t in self._store.teams.values()]

    async def list_for_user(self, user_id: str) -> list[Team]:
        memberships = sorted(
            (m for m in self._store.members.values() if m.user_id == user_id),
            key=lambda m: m.joined_at,
        )
        return [copy.deepcopy(self._store.teams[m.team_id]) for m in memberships]

    async def create(self, team: Team) -> Team:
        self._store.teams[team.id] = copy.deepcopy(team)
        return team


class FakeTeamMemberRepository:
    """In-memory membership repository; the OWNER row is immutable."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, team_id: str, user_id: str) -> TeamMember | None:
        return copy.deepcopy(self._store.members.get((team_id, user_id)))

    async def list_by_team(self, team_id: str) -> list[TeamMember]:
        return sorted(
            (copy.deepcopy(m) for m in self._store.members.values() if m.team_id == team_id),
            key=lambda m: m.joined_at,
        )

    async def add(self, member: TeamMember) -> TeamMember:
        key = (member.team_id, member.user_id)
        if key in self._store.members:
            raise Conflict("User is already a member of this team")
        self._store.members[key] = copy.deepcopy(member)
        return member

    async def update_role(self, team_id: str, user_id: str, role: TeamRole) -> None:
        if role == TeamRole.OWNER:
            raise InvalidTransition("Ownership cannot be granted through a role change")
        member = self._locked(team_id, user_id)
        if member.role == TeamRole.OWNER:
            raise InvalidTransition("The team owner's role cannot be changed")
        member.role = role

    async def remove(self, team_id: str, user_id: str) -> None:
        member = self._locked(team_id, user_id)
        if member.role == TeamRole.OWNER:
            raise InvalidTransition("The team owner cannot be removed")
        del self._store.members[(team_id, user_id)]

    def _locked(self, team_id: str, user_id: str) -> TeamMember:
        member = self._store.members.get((team_id, user_id))
        if not member:
            raise NotFound("TeamMember", f"{team_id}/{user_id}")
        return member


class FakeTeamInvitationRepository:
    """In-memory invitation repository; only PENDING rows change status."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, invitation_id: str) -> TeamInvitation | None:
        return copy.deepcopy(self._store.invitations.get(invitation_id))

    async def list_by_team(
        self, team_id: str, status: InvitationStatus | None = None
    ) -> list[TeamInvitation]:
        return [
            copy.deepcopy(i)
            for i in self._store.invitations.values()
            if i.team_id == team_id and (status is None or i.status == status)
        ]

    async def get_pending(self, team_id: str, email: str) -> TeamInvitation | None:
        for i in self._store.invitations.values():
            if (
                i.team_id == team_id
                and i.email.lower() == email.lower()
                and i.status == InvitationStatus.PENDING
            ):
                return copy.deepcopy(i)
        return None

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        self._store.invitations[invitation.id] = copy.deepcopy(invitation)
        return invitation

    async def update_status(self, invitation_id: str, status: InvitationStatus) -> None:
        if status == InvitationStatus.PENDING:
            raise InvalidTransition("Invitations cannot return to PENDING")
        invitation = self._store.invitations.get(invitation_id)
        if not invitation or invitation.status != InvitationStatus.PENDING:
            raise InvalidTransition(f"Invitation {invitation_id} is not pending")
        invitation.status = status


class FakeProductRepository:
    """In-memory product repository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.products.get(product_id))

    async def list_by_team(self, team_id: str) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.products.values() if p.team_id == team_id]

    async def count_by_team(self, team_id: str) -> int:
        return sum(1 for p in self._store.products.values() if p.team_id == team_id)

    async def create(self, product: Product) -> Product:
        self._store.products[product.id] = copy.deepcopy(product)
        return product

    async def update(self, product: Product) -> None:
        self._store.products[product.id] = copy.deepcopy(product)

    async def delete(self, product_id: str) -> None:
        self._store.products.pop(product_id, None)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.users = FakeUserRepository(store)
        self.roles = FakeRoleRepository(store)
        self.permissions = FakePermissionRepository(store)
        self.plans = FakePlanRepository(store)
        self.features = _FakeCatalogRepository(store.features)
        self.limits = _FakeCatalogRepository(store.limits)
        self.teams = FakeTeamRepository(store)
        self.team_members = FakeTeamMemberRepository(store)
        self.invitations = FakeTeamInvitationRepository(store)
        self.products = FakeProductRepository(store)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: InMemoryStore):
    """Factory yielding a FakeUnitOfWork; an exception restores the store like a rollback."""

    @asynccontextmanager
    async def _factory():
        snapshot = copy.deepcopy(store)
        try:
            yield FakeUnitOfWork(store)
        except BaseException:
            store.restore(snapshot)
            raise

    return _factory


# --- Reference data ---

SUPER_ADMIN_PERMISSION_ID = "22"
ADMIN_ROLE_ID = "1"
MEMBER_ROLE_ID = "2"
VIEWER_ROLE_ID = "3"
FREE_PLAN_ID = "1"
PRO_PLAN_ID = "2"
ENTERPRISE_PLAN_ID = "3"
MAX_PRODUCTS_LIMIT_ID = "5"

ADMIN_ID = "1"
OWNER_ID = "owner"
MEMBER_ID = "member"
VIEWER_ID = "viewer"
OUTSIDER_ID = "outsider"
TEAM_ID = "team-1"
OTHER_TEAM_ID = "team-2"


def _now() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def seed_reference_data(store: InMemoryStore) -> None:
    """Permissions, roles, plans, features and limits."""
    pid = 0
    for subject in ("Product", "Role", "User", "Plan", "Team"):
        for action in ("create", "read", "update", "delete"):
            pid += 1
            store.permissions[str(pid)] = Permission(
                id=str(pid), action=action, subject=subject, name=f"{action} {subject}"
            )
    store.permissions["21"] = Permission(
        id="21", action="read", subject="Permission", name="read Permission"
    )
    store.permissions[SUPER_ADMIN_PERMISSION_ID] = Permission(
        id=SUPER_ADMIN_PERMISSION_ID, action="manage", subject="all", name="Manage everything"
    )

    product_crud = {p.id for p in store.permissions.values() if p.subject == "Product"}
    store.roles[ADMIN_ROLE_ID] = Role(
        id=ADMIN_ROLE_ID,
        name="Administrador",
        description="Full access",
        permission_ids={SUPER_ADMIN_PERMISSION_ID},
    )
    store.roles[MEMBER_ROLE_ID] = Role(
        id=MEMBER_ROLE_ID, name="Membro", description="Team products", permission_ids=product_crud
    )
    read_product = {p.id for p in store.permissions.values()
                    if p.subject == "Product" and p.action == "read"}
    store.roles[VIEWER_ROLE_ID] = Role(
        id=VIEWER_ROLE_ID, name="Viewer", description="Read only", permission_ids=read_product
    )

    for i, key in enumerate(("advanced-reports", "api-access", "custom-branding", "priority-support"), 1):
        store.features[str(i)] = Feature(id=str(i), key=key, name=key)
    for i, key in enumerate(
        ("max-projects", "storage-limit-mb", "max-api-calls", "max-team-members", "max-products"), 1
    ):
        store.limits[str(i)] = Limit(id=str(i), key=key, name=key)

    store.plans[FREE_PLAN_ID] = Plan(
        id=FREE_PLAN_ID, name="Free", price=0.0, price_description="Grátis"
    )
    store.plans[PRO_PLAN_ID] = Plan(
        id=PRO_PLAN_ID, name="Pro", price=49.9, price_description="/mês"
    )
    store.plans[ENTERPRISE_PLAN_ID] = Plan(
        id=ENTERPRISE_PLAN_ID, name="Enterprise", price=199.9, price_description="/mês"
    )
    store.plan_features[FREE_PLAN_ID] = set()
    store.plan_features[PRO_PLAN_ID] = {"1", "2"}
    store.plan_features[ENTERPRISE_PLAN_ID] = {"1", "2", "3", "4"}
    store.plan_limits[FREE_PLAN_ID] = {"1": 3, MAX_PRODUCTS_LIMIT_ID: 5}
    store.plan_limits[PRO_PLAN_ID] = {"1": 20, MAX_PRODUCTS_LIMIT_ID: 50}
    store.plan_limits[ENTERPRISE_PLAN_ID] = {"1": -1, MAX_PRODUCTS_LIMIT_ID: -1}


def add_user(
    store: InMemoryStore,
    user_id: str,
    role_id: str = MEMBER_ROLE_ID,
    plan_id: str = FREE_PLAN_ID,
    email: str | None = None,
) -> User:
    user = User(
        id=user_id,
        full_name=f"User {user_id}",
        email=email or f"{user_id}@example.com",
        role_id=role_id,
        plan_id=plan_id,
        created_at=_now(),
        updated_at=_now(),
    )
    store.users[user_id] = user
    return user


def add_team(store: InMemoryStore, team_id: str, owner_id: str) -> Team:
    team = Team(id=team_id, name=f"Team {team_id}", owner_id=owner_id,
                created_at=_now(), updated_at=_now())
    store.teams[team_id] = team
    store.members[(team_id, owner_id)] = TeamMember(
        team_id=team_id, user_id=owner_id, role=TeamRole.OWNER, joined_at=_now()
    )
    return team


def add_member(store: InMemoryStore, team_id: str, user_id: str, role: TeamRole) -> TeamMember:
    member = TeamMember(team_id=team_id, user_id=user_id, role=role, joined_at=_now())
    store.members[(team_id, user_id)] = member
    return member


def add_products(store: InMemoryStore, team_id: str, count: int) -> list[Product]:
    products = []
    for _ in range(count):
        n = len(store.products) + 1
        product = Product(
            id=f"product-{n}",
            team_id=team_id,
            name=f"Product {n}",
            status=ProductStatus.ACTIVE,
            created_at=_now(),
            updated_at=_now(),
        )
        store.products[product.id] = product
        products.append(product)
    return products


def seed_tenancy(store: InMemoryStore) -> None:
    """Super admin, a team with OWNER/ADMIN/MEMBER, a viewer and an outsider."""
    add_user(store, ADMIN_ID, role_id=ADMIN_ROLE_ID)
    add_user(store, OWNER_ID)
    add_user(store, MEMBER_ID)
    add_user(store, VIEWER_ID, role_id=VIEWER_ROLE_ID)
    add_user(store, OUTSIDER_ID)
    add_team(store, TEAM_ID, OWNER_ID)
    add_member(store, TEAM_ID, ADMIN_ID, TeamRole.ADMIN)
    add_member(store, TEAM_ID, MEMBER_ID, TeamRole.MEMBER)
    add_member(store, TEAM_ID, VIEWER_ID, TeamRole.MEMBER)
    add_team(store, OTHER_TEAM_ID, OUTSIDER_ID)


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryStore:
    """Store seeded with reference data and a team."""
    s = InMemoryStore()
    seed_reference_data(s)
    seed_tenancy(s)
    return s


@pytest.fixture
def uow_factory(store: InMemoryStore):
    """Factory returning async context manager with FakeUnitOfWork."""
    return make_uow_factory(store)


@pytest.fixture
def permission_checker(uow_factory) -> RBACPermissionChecker:
    return RBACPermissionChecker(uow_factory)


@pytest.fixture
def entitlement_checker(uow_factory) -> PlanEntitlementChecker:
    return PlanEntitlementChecker(uow_factory)


@pytest.fixture
def team_access_resolver(uow_factory) -> MembershipTeamAccessResolver:
    return MembershipTeamAccessResolver(uow_factory)
