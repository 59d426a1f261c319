"""Team-scoped product use cases.

Every path requires team membership plus the matching global permission on
Product, and every read goes through scope_to_team.
"""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from tenantgate.application.dto.product_dto import ProductInput
from tenantgate.application.ports import (
    EntitlementChecker,
    PermissionChecker,
    TeamAccessResolver,
    UnitOfWork,
)
from tenantgate.domain.entities import Product
from tenantgate.domain.exceptions import LimitExceeded, NotFound, PermissionDenied
from tenantgate.domain.policies import scope_to_team
from tenantgate.domain.value_objects import Action, Subject

logger = logging.getLogger(__name__)

MAX_PRODUCTS = "max-products"


class _TeamProductUseCase:
    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        team_access_resolver: TeamAccessResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._team_access = team_access_resolver

    async def _authorize(self, actor_id: str, team_id: str | None, action: Action) -> None:
        access = await self._team_access.resolve(actor_id, team_id)
        if not access.is_member:
            raise PermissionDenied("User is not a member of this team")
        if not await self._permission_checker.user_can(actor_id, action, Subject.PRODUCT):
            raise PermissionDenied(f"User cannot {action} products")

    @staticmethod
    async def _get_team_product(uow: UnitOfWork, team_id: str, product_id: str) -> Product:
        product = await uow.products.get_by_id(product_id)
        scoped = scope_to_team([product] if product else [], team_id)
        if not scoped:
            raise NotFound("Product", product_id)
        return scoped[0]


class ListProductsUseCase(_TeamProductUseCase):
    """Products of the current team."""

    async def execute(self, actor_id: str, team_id: str | None) -> list[Product]:
        if not team_id:
            return []
        await self._authorize(actor_id, team_id, Action.READ)
        async with self._uow_factory() as uow:
            products = await uow.products.list_by_team(team_id)
        return scope_to_team(products, team_id)


class CreateProductUseCase(_TeamProductUseCase):
    """Create a product unless the actor's plan quota is used up."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        team_access_resolver: TeamAccessResolver,
        entitlement_checker: EntitlementChecker,
    ) -> None:
        super().__init__(unit_of_work_factory, permission_checker, team_access_resolver)
        self._entitlements = entitlement_checker

    async def execute(self, actor_id: str, team_id: str, data: ProductInput) -> Product:
        await self._authorize(actor_id, team_id, Action.CREATE)
        data.validate()
        entitlements = await self._entitlements.for_user(actor_id)

        async with self._uow_factory() as uow:
            count = await uow.products.count_by_team(team_id)
            if not entitlements.within_limit(MAX_PRODUCTS, count):
                limit = entitlements.get_limit(MAX_PRODUCTS)
                logger.warning("Team %s is at its product limit (%d/%d)", team_id, count, limit)
                raise LimitExceeded(MAX_PRODUCTS, limit, count)

            now = datetime.now(UTC)
            product = Product(
                id=str(uuid4()),
                team_id=team_id,
                name=data.name.strip(),
                description=data.description or None,
                status=data.status,
                created_at=now,
                updated_at=now,
                created_by=actor_id,
            )
            await uow.products.create(product)

        logger.info("Product %s created in team %s by %s", product.id, team_id, actor_id)
        return product


class UpdateProductUseCase(_TeamProductUseCase):
    """Update a product of the current team."""

    async def execute(
        self, actor_id: str, team_id: str, product_id: str, data: ProductInput
    ) -> Product:
        await self._authorize(actor_id, team_id, Action.UPDATE)
        data.validate()

        async with self._uow_factory() as uow:
            product = await self._get_team_product(uow, team_id, product_id)
            product.name = data.name.strip()
            product.description = data.description or None
            product.status = data.status
            product.updated_at = datetime.now(UTC)
            await uow.products.update(product)

        return product


class DeleteProductUseCase(_TeamProductUseCase):
    """Delete a product of the current team."""

    async def execute(self, actor_id: str, team_id: str, product_id: str) -> None:
        await self._authorize(actor_id, team_id, Action.DELETE)
        async with self._uow_factory() as uow:
            await self._get_team_product(uow, team_id, product_id)
            await uow.products.delete(product_id)

        logger.info("Product %s deleted from team %s by %s", product_id, team_id, actor_id)
