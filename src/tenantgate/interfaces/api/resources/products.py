"""Product API resources - scoped to the caller's current team."""

import falcon
import falcon.asgi

from tenantgate.application.dto.product_dto import ProductInput
from tenantgate.application.ports import TeamAccessResolver
from tenantgate.application.use_cases.product.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from tenantgate.domain.entities import Product
from tenantgate.domain.exceptions import ValidationError
from tenantgate.domain.value_objects import ProductStatus
from tenantgate.interfaces.api.request import (
    current_team_id,
    read_body,
    require_field,
    require_user,
)


def _serialize_product(product: Product) -> dict:
    return {
        "id": product.id,
        "team_id": product.team_id,
        "name": product.name,
        "description": product.description,
        "status": product.status.value,
        "created_by": product.created_by,
        "created_at": product.created_at.isoformat(),
        "updated_at": product.updated_at.isoformat(),
    }


def _parse_product(body: dict) -> ProductInput:
    raw_status = body.get("status") or ProductStatus.ACTIVE.value
    try:
        status = ProductStatus(str(raw_status).upper())
    except ValueError as e:
        raise ValidationError(f"Invalid status: {raw_status}") from e
    return ProductInput(
        name=require_field(body, "name"),
        description=body.get("description"),
        status=status,
    )


async def _resolve_team(req: falcon.asgi.Request, team_access: TeamAccessResolver, user_id: str) -> str | None:
    team = await team_access.select_current_team(user_id, current_team_id(req))
    return team.id if team else None


async def _require_team(req: falcon.asgi.Request, team_access: TeamAccessResolver, user_id: str) -> str:
    team_id = await _resolve_team(req, team_access, user_id)
    if not team_id:
        raise ValidationError("No team selected")
    return team_id


class ProductsResource:
    """GET/POST /v1/products."""

    def __init__(
        self,
        team_access_resolver: TeamAccessResolver,
        list_products: ListProductsUseCase,
        create_product: CreateProductUseCase,
    ) -> None:
        self._team_access = team_access_resolver
        self._list = list_products
        self._create = create_product

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        team_id = await _resolve_team(req, self._team_access, user.user_id)
        products = await self._list.execute(user.user_id, team_id)
        resp.media = {"team_id": team_id, "items": [_serialize_product(p) for p in products]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        team_id = await _require_team(req, self._team_access, user.user_id)
        body = await read_body(req)
        product = await self._create.execute(user.user_id, team_id, _parse_product(body))
        resp.media = _serialize_product(product)
        resp.status = falcon.HTTP_201


class ProductResource:
    """PATCH/DELETE /v1/products/{product_id}."""

    def __init__(
        self,
        team_access_resolver: TeamAccessResolver,
        update_product: UpdateProductUseCase,
        delete_product: DeleteProductUseCase,
    ) -> None:
        self._team_access = team_access_resolver
        self._update = update_product
        self._delete = delete_product

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        user = require_user(req)
        team_id = await _require_team(req, self._team_access, user.user_id)
        body = await read_body(req)
        product = await self._update.execute(
            user.user_id, team_id, product_id, _parse_product(body)
        )
        resp.media = _serialize_product(product)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, product_id: str
    ) -> None:
        user = require_user(req)
        team_id = await _require_team(req, self._team_access, user.user_id)
        await self._delete.execute(user.user_id, team_id, product_id)
        resp.status = falcon.HTTP_204
