"""CORS middleware for browser clients of the permission API."""

import falcon.asgi

ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOWED_HEADERS = "Authorization, X-Client-Info, Apikey, Content-Type"
PREFLIGHT_MAX_AGE = "86400"


class CORSMiddleware:
    """Answers OPTIONS preflight and stamps CORS headers on every response.

    An empty origin list allows any origin. Otherwise a listed request origin
    is echoed back and anything else gets the first configured origin.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = list(origins)

    def allowed_origin(self, origin: str | None) -> str:
        if not self._origins:
            return "*"
        if origin in self._origins:
            return origin
        return self._origins[0]

    def _apply(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.set_headers({
            "Access-Control-Allow-Origin": self.allowed_origin(req.get_header("Origin")),
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
            "Access-Control-Max-Age": PREFLIGHT_MAX_AGE,
        })
        if self._origins:
            resp.append_header("Vary", "Origin")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method != "OPTIONS":
            return
        self._apply(req, resp)
        resp.status = falcon.HTTP_200
        resp.media = {}
        resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        if req.method != "OPTIONS":
            self._apply(req, resp)
