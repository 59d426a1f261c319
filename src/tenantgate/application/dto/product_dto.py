"""Product DTOs."""

from dataclasses import dataclass

from tenantgate.application.dto.validation import check_optional_text, clean_text
from tenantgate.domain.exceptions import ValidationError
from tenantgate.domain.value_objects import ProductStatus

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass
class ProductInput:
    """Product fields supplied by the caller."""

    name: str
    description: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE

    def validate(self) -> None:
        name = clean_text(self.name, "name")
        check_optional_text(self.description, "description")
        if len(name) < NAME_MIN_LENGTH:
            raise ValidationError(f"Name must have at least {NAME_MIN_LENGTH} characters")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must have at most {NAME_MAX_LENGTH} characters")
        if self.description and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must have at most {DESCRIPTION_MAX_LENGTH} characters"
            )
        if self.status not in list(ProductStatus):
            raise ValidationError(f"Invalid status: {self.status}")
