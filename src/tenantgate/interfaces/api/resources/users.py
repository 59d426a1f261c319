"""User API resources - registration and administrative assignment."""

import falcon
import falcon.asgi

from tenantgate.application.ports import PermissionChecker
from tenantgate.application.use_cases.user.assign_user_role import (
    AssignUserRoleUseCase,
    ChangeUserPlanUseCase,
)
from tenantgate.application.use_cases.user.register_user import RegisterUserUseCase
from tenantgate.domain.entities import User
from tenantgate.domain.exceptions import PermissionDenied
from tenantgate.domain.value_objects import Action, Subject
from tenantgate.interfaces.api.request import read_body, require_field, require_str, require_user


def _serialize_user(user: User, role_name: str | None = None) -> dict:
    data = {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "role_id": user.role_id,
        "plan_id": user.plan_id,
        "created_at": user.created_at.isoformat(),
        "updated_at": user.updated_at.isoformat(),
    }
    if role_name is not None:
        data["role_name"] = role_name
    return data


class UsersResource:
    """GET/POST /v1/users - list users with role names, register a user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        register_user: RegisterUserUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._register = register_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        if not await self._permission_checker.user_can(user.user_id, Action.READ, Subject.USER):
            raise PermissionDenied("User cannot list users")

        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
            roles = {r.id: r.name for r in await uow.roles.list_all()}

        resp.media = {"items": [_serialize_user(u, roles.get(u.role_id, "")) for u in users]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Open registration; the role is always the configured default role.

        Credentials are verified by the identity provider.
        """
        body = await read_body(req)
        created = await self._register.execute(
            full_name=require_field(body, "full_name"),
            email=require_field(body, "email"),
            plan_id=require_str(body, "plan_id"),
            credential_ref=body.get("credential_ref"),
        )
        resp.media = _serialize_user(created)
        resp.status = falcon.HTTP_201


class UserRoleResource:
    """PUT /v1/users/{user_id}/role."""

    def __init__(self, assign_user_role: AssignUserRoleUseCase) -> None:
        self._assign = assign_user_role

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_user(req)
        body = await read_body(req)
        updated = await self._assign.execute(actor.user_id, user_id, require_str(body, "role_id"))
        resp.media = _serialize_user(updated)
        resp.status = falcon.HTTP_200


class UserPlanResource:
    """PUT /v1/users/{user_id}/plan."""

    def __init__(self, change_user_plan: ChangeUserPlanUseCase) -> None:
        self._change = change_user_plan

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_user(req)
        body = await read_body(req)
        updated = await self._change.execute(actor.user_id, user_id, require_str(body, "plan_id"))
        resp.media = _serialize_user(updated)
        resp.status = falcon.HTTP_200
