"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from tenantgate.interfaces.api.app import build_resources, create_app
from tenantgate.interfaces.api.middleware.auth import AuthMiddleware
from tenantgate.interfaces.api.middleware.team_context import TeamContextMiddleware

from tests.conftest import MEMBER_ROLE_ID


@pytest.fixture
def app(uow_factory, permission_checker, entitlement_checker, team_access_resolver):
    """Falcon ASGI app over the in-memory store; bearer tokens are user ids."""

    async def ready() -> bool:
        return True

    resources = build_resources(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        entitlement_checker=entitlement_checker,
        team_access_resolver=team_access_resolver,
        default_role_id=MEMBER_ROLE_ID,
        readiness_check=ready,
    )
    return create_app(
        resources,
        middleware=[AuthMiddleware(dev_mode=True), TeamContextMiddleware("X-Team-Id")],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


def auth(user_id: str, team_id: str | None = None) -> dict[str, str]:
    """Request headers for user_id, optionally selecting a team."""
    headers = {"Authorization": f"Bearer {user_id}"}
    if team_id:
        headers["X-Team-Id"] = team_id
    return headers
