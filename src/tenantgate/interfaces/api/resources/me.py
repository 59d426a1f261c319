"""Current user's authorization and entitlement gates."""

import falcon
import falcon.asgi

from tenantgate.application.ports import EntitlementChecker, PermissionChecker
from tenantgate.domain.exceptions import NotFound
from tenantgate.domain.policies import is_super_admin
from tenantgate.interfaces.api.request import require_user


class MePermissionsResource:
    """GET /v1/me/permissions - effective permissions of the caller."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        try:
            permissions = await self._permission_checker.resolve_effective_permissions(user.user_id)
        except NotFound:
            permissions = []

        resp.media = {
            "items": [
                {"id": p.id, "action": p.action, "subject": p.subject, "name": p.name}
                for p in permissions
            ],
            "super_admin": is_super_admin(permissions),
        }
        resp.status = falcon.HTTP_200


class MeCanResource:
    """GET /v1/me/can?action=&subject= - single capability check."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        action = req.get_param("action", required=True)
        subject = req.get_param("subject", required=True)
        allowed = await self._permission_checker.user_can(user.user_id, action, subject)
        resp.media = {"action": action, "subject": subject, "allowed": allowed}
        resp.status = falcon.HTTP_200


class MeEntitlementsResource:
    """GET /v1/me/entitlements - plan, features and limits of the caller."""

    def __init__(self, entitlement_checker: EntitlementChecker) -> None:
        self._entitlements = entitlement_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        entitlements = await self._entitlements.for_user(user.user_id)
        plan = entitlements.current_plan

        feature = req.get_param("feature")
        limit = req.get_param("limit")
        if feature or limit:
            resp.media = {}
            if feature:
                resp.media["feature"] = {"key": feature, "enabled": entitlements.can(feature)}
            if limit:
                resp.media["limit"] = {"key": limit, "value": entitlements.get_limit(limit)}
            resp.status = falcon.HTTP_200
            return

        resp.media = {
            "plan": (
                {
                    "id": plan.id,
                    "name": plan.name,
                    "price": plan.price,
                    "price_description": plan.price_description,
                }
                if plan
                else None
            ),
            "features": sorted(entitlements.features),
            "limits": dict(entitlements.limits),
        }
        resp.status = falcon.HTTP_200
