"""Permission repository port - catalog and role links."""

from typing import Protocol

from ciecnow.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permissions and role-permission links."""

    async def list_all(self) -> list[Permission]: ...

    async def list_for_role(self, role_id: int) -> list[Permission]: ...

    async def replace_for_role(self, role_id: int, permission_ids: list[int]) -> None: ...
