"""Domain exceptions."""


class TenantGateError(Exception):
    """Base exception for TenantGate."""

    pass


class PermissionDenied(TenantGateError):
    """User does not have permission for the requested action."""

    pass


class LimitExceeded(PermissionDenied):
    """Operation would exceed a plan limit."""

    def __init__(self, limit_key: str, limit: int, current: int) -> None:
        super().__init__(f"Plan limit '{limit_key}' reached ({current}/{limit})")
        self.limit_key = limit_key
        self.limit = limit
        self.current = current


class NotFound(TenantGateError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        message = f"{entity} not found" if identifier is None else f"{entity} {identifier} not found"
        super().__init__(message)
        self.entity = entity
        self.identifier = identifier


class Conflict(TenantGateError):
    """Operation conflicts with existing data (duplicate name, referenced row)."""

    pass


class InvalidTransition(TenantGateError):
    """Requested state change is not allowed from the current state."""

    pass


class ValidationError(TenantGateError):
    """Validation failed for input data."""

    pass
