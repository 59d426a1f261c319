"""Map domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from tenantgate.domain.exceptions import (
    Conflict,
    InvalidTransition,
    LimitExceeded,
    NotFound,
    PermissionDenied,
    ValidationError,
)

logger = logging.getLogger(__name__)


class Unauthorized(Exception):
    """Request has no authenticated user."""


def _handler(status: str, code: str | None = None):
    async def handle(req, resp, ex, params) -> None:
        resp.status = status
        resp.media = {"error": str(ex)}
        if code:
            resp.media["code"] = code

    return handle


async def _handle_limit_exceeded(req, resp, ex: LimitExceeded, params) -> None:
    resp.status = falcon.HTTP_403
    resp.media = {
        "error": str(ex),
        "code": "limit_exceeded",
        "limit_key": ex.limit_key,
        "limit": ex.limit,
        "current": ex.current,
    }


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers. Falcon picks the most specific class, so HTTPError keeps its own."""
    app.add_error_handler(Exception, _handle_unexpected)
    app.add_error_handler(Unauthorized, _handler(falcon.HTTP_401))
    app.add_error_handler(PermissionDenied, _handler(falcon.HTTP_403, "permission_denied"))
    app.add_error_handler(LimitExceeded, _handle_limit_exceeded)
    app.add_error_handler(NotFound, _handler(falcon.HTTP_404, "not_found"))
    app.add_error_handler(Conflict, _handler(falcon.HTTP_409, "conflict"))
    app.add_error_handler(InvalidTransition, _handler(falcon.HTTP_409, "invalid_transition"))
    app.add_error_handler(ValidationError, _handler(falcon.HTTP_400, "validation_error"))
