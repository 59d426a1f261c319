"""CORS middleware - adds Access-Control-Allow-Origin headers."""

import falcon
import falcon.asgi


class CORSMiddleware:
    """Middleware that adds CORS headers and answers OPTIONS preflight."""

    def __init__(self, origins: list[str], team_header: str = "X-Team-Id") -> None:
        self._origins = origins
        self._allow_headers = f"Authorization, Content-Type, {team_header}"

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        if not origin or origin not in self._origins:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Vary", "Origin")
        resp.set_header(
            "Access-Control-Allow-Methods", "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        )
        resp.set_header("Access-Control-Allow-Headers", self._allow_headers)
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method == "OPTIONS":
            self._set_cors_headers(req, resp)
            resp.status = falcon.HTTP_200
            resp.media = {}
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._set_cors_headers(req, resp)
