"""Profile repository port."""

from typing import Protocol

from ciecnow.domain.entities import UserProfile


class ProfileRepository(Protocol):
    """Port for user profile persistence."""

    async def get_by_id(self, user_id: str) -> UserProfile | None: ...

    async def list_all(self) -> list[UserProfile]: ...

    async def update_access(
        self, user_id: str, role_id: int | None, is_approved: bool
    ) -> None: ...
