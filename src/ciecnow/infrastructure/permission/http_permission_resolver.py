"""HTTP permission resolver - calls the permission resolution endpoint."""

import httpx

from ciecnow.application.dto.records import permission_keys_from_payload
from ciecnow.domain.exceptions import PermissionResolutionError

PERMISSIONS_PATH = "/v1/me/permissions"


class HttpPermissionResolver:
    """Resolves ``action:subject`` keys for a bearer token over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout)

    async def resolve(self, access_token: str) -> list[str]:
        try:
            response = await self._client.get(
                PERMISSIONS_PATH,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            raise PermissionResolutionError(f"Permission request failed: {exc}") from exc

        if response.status_code != 200:
            raise PermissionResolutionError(
                f"Permission request returned {response.status_code}"
            )
        try:
            return permission_keys_from_payload(response.json())
        except ValueError as exc:
            raise PermissionResolutionError(f"Malformed permission response: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
