"""Role repository port."""

from typing import Protocol

from ciecnow.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: int) -> Role | None: ...

    async def list_all(self) -> list[Role]: ...

    async def create(self, name: str) -> Role: ...

    async def delete(self, role_id: int) -> None: ...
