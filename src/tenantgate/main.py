"""Application entry point and composition root."""

import logging
from functools import partial

from tenantgate import __version__
from tenantgate.config import Settings, get_settings
from tenantgate.infrastructure.auth.keycloak_provider import KeycloakProvider
from tenantgate.infrastructure.entitlement.entitlement_checker import PlanEntitlementChecker
from tenantgate.infrastructure.permission.permission_checker import RBACPermissionChecker
from tenantgate.infrastructure.persistence.postgres.connection import create_pool, ping
from tenantgate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from tenantgate.infrastructure.team.team_access_resolver import MembershipTeamAccessResolver
from tenantgate.interfaces.api.app import build_resources, create_app
from tenantgate.interfaces.api.middleware.auth import AuthMiddleware
from tenantgate.interfaces.api.middleware.cors import CORSMiddleware
from tenantgate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from tenantgate.interfaces.api.middleware.team_context import TeamContextMiddleware

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Root logging from settings.log_level (DEBUG when settings.debug)."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_tenantgate_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(settings.database_url, max_size=settings.database_pool_max_size)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None and settings.auth_dev_mode:
        logger.warning("Keycloak not configured: bearer tokens are trusted as user ids")

    readiness_check = partial(ping, pool)
    resources = build_resources(
        unit_of_work_factory=uow_factory,
        permission_checker=RBACPermissionChecker(uow_factory),
        entitlement_checker=PlanEntitlementChecker(uow_factory),
        team_access_resolver=MembershipTeamAccessResolver(uow_factory),
        default_role_id=settings.default_role_id,
        readiness_check=readiness_check,
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins, settings.team_header),
            PoolLifespanMiddleware(pool, startup_check=readiness_check),
            AuthMiddleware(keycloak, dev_mode=settings.auth_dev_mode),
            TeamContextMiddleware(settings.team_header),
        ],
    )
    logger.info("TenantGate v%s ready (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_tenantgate_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """CLI entry point."""
    run_server()
