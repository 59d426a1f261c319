"""Feature and limit definition repository ports."""

from typing import Protocol

from tenantgate.domain.entities import Feature, Limit


class FeatureRepository(Protocol):
    """Port for feature reference data."""

    async def get_by_id(self, feature_id: str) -> Feature | None: ...

    async def get_by_key(self, key: str) -> Feature | None: ...

    async def list_all(self) -> list[Feature]: ...


class LimitRepository(Protocol):
    """Port for limit reference data."""

    async def get_by_id(self, limit_id: str) -> Limit | None: ...

    async def get_by_key(self, key: str) -> Limit | None: ...

    async def list_all(self) -> list[Limit]: ...
