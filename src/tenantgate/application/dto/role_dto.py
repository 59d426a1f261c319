"""Role DTOs."""

from dataclasses import dataclass, field

from tenantgate.application.dto.validation import check_id_list, check_optional_text, clean_text
from tenantgate.domain.exceptions import ValidationError


@dataclass
class RoleInput:
    """Input for creating a role. An empty permission set is allowed."""

    name: str
    description: str = ""
    color: str = "#6b7280"
    permission_ids: set[str] = field(default_factory=set)

    def validate(self) -> None:
        if not clean_text(self.name, "name"):
            raise ValidationError("Role name is required")
        check_optional_text(self.description, "description")
        check_optional_text(self.color, "color")
        check_id_list(self.permission_ids, "permission_ids")


@dataclass
class RoleUpdate:
    """Partial role update; None leaves a field unchanged."""

    name: str | None = None
    description: str | None = None
    color: str | None = None
    permission_ids: set[str] | None = None

    def validate(self) -> None:
        if self.name is not None and not clean_text(self.name, "name"):
            raise ValidationError("Role name cannot be empty")
        check_optional_text(self.description, "description")
        check_optional_text(self.color, "color")
        check_id_list(self.permission_ids, "permission_ids")
