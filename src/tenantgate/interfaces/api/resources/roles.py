"""Role and permission API resources."""

import falcon
import falcon.asgi

from tenantgate.application.dto.role_dto import RoleInput, RoleUpdate
from tenantgate.application.ports import PermissionChecker
from tenantgate.application.use_cases.role.create_role import CreateRoleUseCase
from tenantgate.application.use_cases.role.delete_role import DeleteRoleUseCase
from tenantgate.application.use_cases.role.update_role import UpdateRoleUseCase
from tenantgate.domain.entities import Role
from tenantgate.domain.exceptions import PermissionDenied
from tenantgate.domain.value_objects import Action, Subject
from tenantgate.interfaces.api.request import (
    optional_id_list,
    read_body,
    require_field,
    require_user,
)


def _serialize_role(role: Role) -> dict:
    return {
        "id": role.id,
        "name": role.name,
        "description": role.description,
        "color": role.color,
        "permission_ids": sorted(role.permission_ids),
    }


class PermissionsResource:
    """GET /v1/permissions - permission catalog."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        if not await self._permission_checker.user_can(user.user_id, Action.READ, Subject.ROLE):
            raise PermissionDenied("User cannot read permissions")

        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()

        resp.media = {
            "items": [
                {
                    "id": p.id,
                    "action": p.action,
                    "subject": p.subject,
                    "name": p.name,
                    "description": p.description,
                }
                for p in permissions
            ]
        }
        resp.status = falcon.HTTP_200


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        if not await self._permission_checker.user_can(user.user_id, Action.READ, Subject.ROLE):
            raise PermissionDenied("User cannot read roles")

        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()

        resp.media = {"items": [_serialize_role(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        body = await read_body(req)
        data = RoleInput(
            name=require_field(body, "name"),
            description=body.get("description") or "",
            color=body.get("color") or "#6b7280",
            permission_ids=set(optional_id_list(body, "permission_ids") or []),
        )
        role = await self._create.execute(user.user_id, data)
        resp.media = _serialize_role(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(self, update_role: UpdateRoleUseCase, delete_role: DeleteRoleUseCase) -> None:
        self._update = update_role
        self._delete = delete_role

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        user = require_user(req)
        body = await read_body(req)
        permission_ids = optional_id_list(body, "permission_ids")
        data = RoleUpdate(
            name=body.get("name"),
            description=body.get("description"),
            color=body.get("color"),
            permission_ids=set(permission_ids) if permission_ids is not None else None,
        )
        role = await self._update.execute(user.user_id, role_id, data)
        resp.media = _serialize_role(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        user = require_user(req)
        await self._delete.execute(user.user_id, role_id)
        resp.status = falcon.HTTP_204
