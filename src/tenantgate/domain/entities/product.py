"""Product entity - team-owned business record."""

from dataclasses import dataclass
from datetime import datetime

from tenantgate.domain.value_objects import ProductStatus


@dataclass
class Product:
    """Product belonging to exactly one team."""

    id: str
    team_id: str
    name: str
    status: ProductStatus
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    created_by: str | None = None
