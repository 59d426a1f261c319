"""Type checks for caller-supplied DTO fields."""

from tenantgate.domain.exceptions import ValidationError


def clean_text(value: object, field: str) -> str:
    """value stripped; ValidationError unless it is a string."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def check_optional_text(value: object, field: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")


def check_id_list(value: object, field: str) -> None:
    """None, or a list (or set) of string ids."""
    if value is None:
        return
    if not isinstance(value, list | set | frozenset) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of ids")
