"""Permission resolution API resource."""

import falcon.asgi

from ciecnow.application.dto.records import permissions_payload
from ciecnow.application.use_cases.permission.resolve_user_permissions import (
    ResolveUserPermissionsUseCase,
)


class MyPermissionsResource:
    """GET /v1/me/permissions - ``action:subject`` keys of the caller."""

    def __init__(self, resolve_permissions: ResolveUserPermissionsUseCase) -> None:
        self._resolve = resolve_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "User not authenticated"}
            return

        keys = await self._resolve.execute(user.user_id)
        resp.media = permissions_payload(keys)
        resp.status = falcon.HTTP_200
