"""Plan DTOs."""

from dataclasses import dataclass

from tenantgate.application.dto.validation import check_id_list, check_optional_text, clean_text
from tenantgate.domain.exceptions import ValidationError
from tenantgate.domain.value_objects.limit_value import is_valid_limit_value


@dataclass
class PlanLimitInput:
    """Value for one limit; -1 means unlimited."""

    limit_id: str
    value: int


def _validate_price(price: float) -> None:
    if isinstance(price, bool) or not isinstance(price, int | float) or price < 0:
        raise ValidationError("Price must be a number greater than or equal to zero")


def _validate_limits(limits: list[PlanLimitInput]) -> None:
    seen: set[str] = set()
    for item in limits:
        if not isinstance(item.limit_id, str):
            raise ValidationError("limit_id must be a string")
        if not is_valid_limit_value(item.value):
            raise ValidationError(
                f"Limit {item.limit_id} must be an integer >= -1, got {item.value!r}"
            )
        if item.limit_id in seen:
            raise ValidationError(f"Limit {item.limit_id} given more than once")
        seen.add(item.limit_id)


@dataclass
class PlanInput:
    """Input for creating a plan with its features and limits."""

    name: str
    price: float
    price_description: str
    description: str | None = None
    feature_ids: list[str] | None = None
    limits: list[PlanLimitInput] | None = None

    def validate(self) -> None:
        if not clean_text(self.name, "name"):
            raise ValidationError("Plan name is required")
        _validate_price(self.price)
        if not clean_text(self.price_description, "price_description"):
            raise ValidationError("Price description is required")
        check_optional_text(self.description, "description")
        check_id_list(self.feature_ids, "feature_ids")
        if self.limits:
            _validate_limits(self.limits)


@dataclass
class PlanUpdate:
    """Partial plan update.

    feature_ids and limits, when given, replace the plan's whole association
    set; None leaves the associations untouched.
    """

    name: str | None = None
    price: float | None = None
    price_description: str | None = None
    description: str | None = None
    feature_ids: list[str] | None = None
    limits: list[PlanLimitInput] | None = None

    def validate(self) -> None:
        if self.name is not None and not clean_text(self.name, "name"):
            raise ValidationError("Plan name cannot be empty")
        if self.price is not None:
            _validate_price(self.price)
        if self.price_description is not None and not clean_text(
            self.price_description, "price_description"
        ):
            raise ValidationError("Price description cannot be empty")
        check_optional_text(self.description, "description")
        check_id_list(self.feature_ids, "feature_ids")
        if self.limits:
            _validate_limits(self.limits)
