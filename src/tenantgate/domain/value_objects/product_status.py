"""Product status."""

from enum import StrEnum


class ProductStatus(StrEnum):
    """Whether a product is active."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
