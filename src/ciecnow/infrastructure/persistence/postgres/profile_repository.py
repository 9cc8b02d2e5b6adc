"""PostgreSQL user profile repository implementation."""

from psycopg import AsyncConnection

from ciecnow.application.dto.records import profile_from_record
from ciecnow.domain.entities import UserProfile

_SELECT = (
    "SELECT u.id, u.full_name, u.is_approved, u.role_id, r.id, r.name "
    "FROM userprofiles u LEFT JOIN roles r ON r.id = u.role_id"
)


def _to_profile(r: tuple) -> UserProfile:
    return profile_from_record({
        "id": str(r[0]),
        "full_name": r[1],
        "is_approved": r[2],
        "role_id": r[3],
        "roles": {"id": r[4], "name": r[5]} if r[4] is not None else None,
    })


class PostgresProfileRepository:
    """User profile repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        """Get profile with its role by user id."""
        cur = await self._conn.execute(f"{_SELECT} WHERE u.id = %s", (user_id,))
        r = await cur.fetchone()
        if not r:
            return None
        return _to_profile(r)

    async def list_all(self) -> list[UserProfile]:
        cur = await self._conn.execute(f"{_SELECT} ORDER BY u.full_name")
        rows = await cur.fetchall()
        return [_to_profile(r) for r in rows]

    async def update_access(
        self, user_id: str, role_id: int | None, is_approved: bool
    ) -> None:
        """Set role and approval flag."""
        await self._conn.execute(
            "UPDATE userprofiles SET role_id = %s, is_approved = %s WHERE id = %s",
            (role_id, is_approved, user_id),
        )
