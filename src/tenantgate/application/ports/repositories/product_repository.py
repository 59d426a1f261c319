"""Product repository port."""

from typing import Protocol

from tenantgate.domain.entities import Product


class ProductRepository(Protocol):
    """Port for product persistence."""

    async def get_by_id(self, product_id: str) -> Product | None: ...

    async def list_by_team(self, team_id: str) -> list[Product]: ...

    async def count_by_team(self, team_id: str) -> int: ...

    async def create(self, product: Product) -> Product: ...

    async def update(self, product: Product) -> None: ...

    async def delete(self, product_id: str) -> None: ...
