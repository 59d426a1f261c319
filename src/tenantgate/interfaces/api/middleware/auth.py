"""Auth middleware - resolves the caller from a bearer token."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.user.

    req.context.user is None for anonymous or rejected requests.
    """

    def __init__(self, keycloak_provider=None, dev_mode: bool = False) -> None:
        self._keycloak = keycloak_provider
        self._dev_mode = dev_mode

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            return

        token = auth[7:].strip()
        if self._keycloak:
            user = self._keycloak.decode_token(token)
            if user:
                req.context.user = RequestUser(
                    user_id=user.user_id,
                    email=user.email,
                    username=user.username,
                )
        elif self._dev_mode and token:
            req.context.user = RequestUser(user_id=token)
