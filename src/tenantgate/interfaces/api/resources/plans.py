"""Plan API resources - plans with their features and limits."""

import falcon
import falcon.asgi

from tenantgate.application.dto.plan_dto import PlanInput, PlanLimitInput, PlanUpdate
from tenantgate.application.ports import UnitOfWork
from tenantgate.application.use_cases.plan.create_plan import CreatePlanUseCase
from tenantgate.application.use_cases.plan.delete_plan import DeletePlanUseCase
from tenantgate.application.use_cases.plan.update_plan import UpdatePlanUseCase
from tenantgate.domain.entities import Plan
from tenantgate.domain.exceptions import NotFound, ValidationError
from tenantgate.interfaces.api.request import (
    optional_id_list,
    read_body,
    require_field,
    require_user,
)


def _parse_limits(raw) -> list[PlanLimitInput] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationError("limits must be a list")
    try:
        return [PlanLimitInput(limit_id=item["limit_id"], value=item["value"]) for item in raw]
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Invalid limit entry: {e}") from e


async def _serialize_plan(uow: UnitOfWork, plan: Plan) -> dict:
    features = await uow.plans.list_features(plan.id)
    limits = await uow.plans.list_limits(plan.id)
    return {
        "id": plan.id,
        "name": plan.name,
        "price": plan.price,
        "price_description": plan.price_description,
        "description": plan.description,
        "features": [{"id": f.id, "key": f.key, "name": f.name} for f in features],
        "limits": [
            {"id": limit.id, "key": limit.key, "name": limit.name, "value": pl.value}
            for limit, pl in limits
        ],
    }


class PlansResource:
    """GET/POST /v1/plans - list (public) and create plans."""

    def __init__(self, unit_of_work_factory: type, create_plan: CreatePlanUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._create = create_plan

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            plans = await uow.plans.list_all()
            items = [await _serialize_plan(uow, p) for p in plans]
        resp.media = {"items": items}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        body = await read_body(req)
        data = PlanInput(
            name=require_field(body, "name"),
            price=require_field(body, "price"),
            price_description=require_field(body, "price_description"),
            description=body.get("description"),
            feature_ids=optional_id_list(body, "feature_ids"),
            limits=_parse_limits(body.get("limits")),
        )
        plan = await self._create.execute(user.user_id, data)
        async with self._uow_factory() as uow:
            resp.media = await _serialize_plan(uow, plan)
        resp.status = falcon.HTTP_201


class PlanResource:
    """GET/PATCH/DELETE /v1/plans/{plan_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        update_plan: UpdatePlanUseCase,
        delete_plan: DeletePlanUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._update = update_plan
        self._delete = delete_plan

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, plan_id: str
    ) -> None:
        async with self._uow_factory() as uow:
            plan = await uow.plans.get_by_id(plan_id)
            if not plan:
                raise NotFound("Plan", plan_id)
            resp.media = await _serialize_plan(uow, plan)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, plan_id: str
    ) -> None:
        user = require_user(req)
        body = await read_body(req)
        data = PlanUpdate(
            name=body.get("name"),
            price=body.get("price"),
            price_description=body.get("price_description"),
            description=body.get("description"),
            feature_ids=optional_id_list(body, "feature_ids"),
            limits=_parse_limits(body.get("limits")),
        )
        plan = await self._update.execute(user.user_id, plan_id, data)
        async with self._uow_factory() as uow:
            resp.media = await _serialize_plan(uow, plan)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, plan_id: str
    ) -> None:
        user = require_user(req)
        await self._delete.execute(user.user_id, plan_id)
        resp.status = falcon.HTTP_204


class EntitlementCatalogResource:
    """GET /v1/features and /v1/limits - entitlement reference data."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get_features(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            features = await uow.features.list_all()
        resp.media = {
            "items": [
                {"id": f.id, "key": f.key, "name": f.name, "description": f.description}
                for f in features
            ]
        }
        resp.status = falcon.HTTP_200

    async def on_get_limits(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            limits = await uow.limits.list_all()
        resp.media = {
            "items": [
                {"id": x.id, "key": x.key, "name": x.name, "description": x.description}
                for x in limits
            ]
        }
        resp.status = falcon.HTTP_200
