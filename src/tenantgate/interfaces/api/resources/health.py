"""Health check endpoints."""

import falcon
import falcon.asgi


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, readiness_check=None) -> None:
        self._readiness_check = readiness_check

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database)."""
        if self._readiness_check and not await self._readiness_check():
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
