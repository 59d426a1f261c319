"""Team context middleware - reads the caller's current team from a header."""

import falcon.asgi


class TeamContextMiddleware:
    """Sets req.context.team_id (None when the header is absent or blank)."""

    def __init__(self, header: str = "X-Team-Id") -> None:
        self._header = header

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        team_id = (req.get_header(self._header) or "").strip()
        req.context.team_id = team_id or None
