"""Request helpers shared by resources."""

from typing import Any

import falcon.asgi

from tenantgate.domain.exceptions import ValidationError
from tenantgate.interfaces.api.errors import Unauthorized


def require_user(req: falcon.asgi.Request):
    """Authenticated user of req, or raise Unauthorized."""
    user = getattr(req.context, "user", None)
    if not user:
        raise Unauthorized("Unauthorized")
    return user


def current_team_id(req: falcon.asgi.Request) -> str | None:
    """Team selected by the caller (TeamContextMiddleware), if any."""
    return getattr(req.context, "team_id", None)


async def read_body(req: falcon.asgi.Request) -> dict[str, Any]:
    """JSON object body of req."""
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_field(body: dict[str, Any], name: str) -> Any:
    """body[name], raising ValidationError when missing."""
    if body.get(name) is None:
        raise ValidationError(f"Missing required field: {name}")
    return body[name]


def require_str(body: dict[str, Any], name: str) -> str:
    """body[name] as a string, raising ValidationError when missing or mistyped."""
    value = require_field(body, name)
    if not isinstance(value, str):
        raise ValidationError(f"Field {name} must be a string")
    return value


def optional_id_list(body: dict[str, Any], name: str) -> list[str] | None:
    """body[name] as a list of string ids; None when absent."""
    value = body.get(name)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"Field {name} must be a list of ids")
    return value
