"""Falcon ASGI application - resources and routes."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from tenantgate.application.ports import (
    EntitlementChecker,
    PermissionChecker,
    TeamAccessResolver,
)
from tenantgate.application.use_cases.admin.get_dashboard_stats import GetDashboardStatsUseCase
from tenantgate.application.use_cases.plan.create_plan import CreatePlanUseCase
from tenantgate.application.use_cases.plan.delete_plan import DeletePlanUseCase
from tenantgate.application.use_cases.plan.update_plan import UpdatePlanUseCase
from tenantgate.application.use_cases.product.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from tenantgate.application.use_cases.role.create_role import CreateRoleUseCase
from tenantgate.application.use_cases.role.delete_role import DeleteRoleUseCase
from tenantgate.application.use_cases.role.update_role import UpdateRoleUseCase
from tenantgate.application.use_cases.team.create_team import CreateTeamUseCase
from tenantgate.application.use_cases.team.invite_member import InviteMemberUseCase
from tenantgate.application.use_cases.team.manage_members import (
    ChangeMemberRoleUseCase,
    RemoveMemberUseCase,
)
from tenantgate.application.use_cases.team.respond_to_invitation import (
    RespondToInvitationUseCase,
)
from tenantgate.application.use_cases.user.assign_user_role import (
    AssignUserRoleUseCase,
    ChangeUserPlanUseCase,
)
from tenantgate.application.use_cases.user.register_user import RegisterUserUseCase
from tenantgate.interfaces.api.errors import register_error_handlers
from tenantgate.interfaces.api.resources.admin import AdminStatsResource
from tenantgate.interfaces.api.resources.health import HealthResource
from tenantgate.interfaces.api.resources.me import (
    MeCanResource,
    MeEntitlementsResource,
    MePermissionsResource,
)
from tenantgate.interfaces.api.resources.plans import (
    EntitlementCatalogResource,
    PlanResource,
    PlansResource,
)
from tenantgate.interfaces.api.resources.products import ProductResource, ProductsResource
from tenantgate.interfaces.api.resources.roles import (
    PermissionsResource,
    RoleResource,
    RolesResource,
)
from tenantgate.interfaces.api.resources.teams import (
    InvitationResponseResource,
    TeamAccessResource,
    TeamInvitationsResource,
    TeamMemberResource,
    TeamMembersResource,
    TeamsResource,
)
from tenantgate.interfaces.api.resources.users import (
    UserPlanResource,
    UserRoleResource,
    UsersResource,
)


@dataclass
class ApiResources:
    """Every resource the API mounts."""

    health: HealthResource
    me_permissions: MePermissionsResource
    me_can: MeCanResource
    me_entitlements: MeEntitlementsResource
    permissions: PermissionsResource
    roles: RolesResource
    role: RoleResource
    users: UsersResource
    user_role: UserRoleResource
    user_plan: UserPlanResource
    plans: PlansResource
    plan: PlanResource
    catalog: EntitlementCatalogResource
    teams: TeamsResource
    team_access: TeamAccessResource
    team_members: TeamMembersResource
    team_member: TeamMemberResource
    team_invitations: TeamInvitationsResource
    invitation_response: InvitationResponseResource
    products: ProductsResource
    product: ProductResource
    admin_stats: AdminStatsResource


def build_resources(
    unit_of_work_factory: type,
    permission_checker: PermissionChecker,
    entitlement_checker: EntitlementChecker,
    team_access_resolver: TeamAccessResolver,
    default_role_id: str,
    readiness_check: Callable[[], Awaitable[bool]] | None = None,
) -> ApiResources:
    """Wire use cases into resources.

    default_role_id is the global role given to self-registered users.
    """
    uow = unit_of_work_factory
    product_deps = (uow, permission_checker, team_access_resolver)

    return ApiResources(
        health=HealthResource(readiness_check),
        me_permissions=MePermissionsResource(permission_checker),
        me_can=MeCanResource(permission_checker),
        me_entitlements=MeEntitlementsResource(entitlement_checker),
        permissions=PermissionsResource(uow, permission_checker),
        roles=RolesResource(uow, permission_checker, CreateRoleUseCase(uow, permission_checker)),
        role=RoleResource(
            UpdateRoleUseCase(uow, permission_checker),
            DeleteRoleUseCase(uow, permission_checker),
        ),
        users=UsersResource(uow, permission_checker, RegisterUserUseCase(uow, default_role_id)),
        user_role=UserRoleResource(AssignUserRoleUseCase(uow, permission_checker)),
        user_plan=UserPlanResource(ChangeUserPlanUseCase(uow, permission_checker)),
        plans=PlansResource(uow, CreatePlanUseCase(uow, permission_checker)),
        plan=PlanResource(
            uow,
            UpdatePlanUseCase(uow, permission_checker),
            DeletePlanUseCase(uow, permission_checker),
        ),
        catalog=EntitlementCatalogResource(uow),
        teams=TeamsResource(team_access_resolver, CreateTeamUseCase(uow)),
        team_access=TeamAccessResource(team_access_resolver),
        team_members=TeamMembersResource(uow, team_access_resolver),
        team_member=TeamMemberResource(
            ChangeMemberRoleUseCase(uow, team_access_resolver),
            RemoveMemberUseCase(uow, team_access_resolver),
        ),
        team_invitations=TeamInvitationsResource(
            uow, team_access_resolver, InviteMemberUseCase(uow, team_access_resolver)
        ),
        invitation_response=InvitationResponseResource(RespondToInvitationUseCase(uow)),
        products=ProductsResource(
            team_access_resolver,
            ListProductsUseCase(*product_deps),
            CreateProductUseCase(*product_deps, entitlement_checker),
        ),
        product=ProductResource(
            team_access_resolver,
            UpdateProductUseCase(*product_deps),
            DeleteProductUseCase(*product_deps),
        ),
        admin_stats=AdminStatsResource(GetDashboardStatsUseCase(uow, permission_checker)),
    )


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    r = resources
    app.add_route("/v1/health", r.health)
    app.add_route("/v1/health/ready", r.health, suffix="ready")
    app.add_route("/v1/me/permissions", r.me_permissions)
    app.add_route("/v1/me/can", r.me_can)
    app.add_route("/v1/me/entitlements", r.me_entitlements)
    app.add_route("/v1/permissions", r.permissions)
    app.add_route("/v1/roles", r.roles)
    app.add_route("/v1/roles/{role_id}", r.role)
    app.add_route("/v1/users", r.users)
    app.add_route("/v1/users/{user_id}/role", r.user_role)
    app.add_route("/v1/users/{user_id}/plan", r.user_plan)
    app.add_route("/v1/plans", r.plans)
    app.add_route("/v1/plans/{plan_id}", r.plan)
    app.add_route("/v1/features", r.catalog, suffix="features")
    app.add_route("/v1/limits", r.catalog, suffix="limits")
    app.add_route("/v1/teams", r.teams)
    app.add_route("/v1/teams/{team_id}/access", r.team_access)
    app.add_route("/v1/teams/{team_id}/members", r.team_members)
    app.add_route("/v1/teams/{team_id}/members/{user_id}", r.team_member)
    app.add_route("/v1/teams/{team_id}/invitations", r.team_invitations)
    app.add_route(
        "/v1/invitations/{invitation_id}/accept", r.invitation_response, suffix="accept"
    )
    app.add_route(
        "/v1/invitations/{invitation_id}/decline", r.invitation_response, suffix="decline"
    )
    app.add_route("/v1/products", r.products)
    app.add_route("/v1/products/{product_id}", r.product)
    app.add_route("/v1/admin/stats", r.admin_stats)
    return app
