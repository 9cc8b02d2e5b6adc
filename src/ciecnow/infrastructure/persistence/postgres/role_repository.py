"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection

from ciecnow.application.dto.records import role_from_record
from ciecnow.domain.entities import Role


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: int) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            "SELECT id, name FROM roles WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return role_from_record({"id": r[0], "name": r[1]})

    async def list_all(self) -> list[Role]:
        """List all roles ordered by name."""
        cur = await self._conn.execute("SELECT id, name FROM roles ORDER BY name")
        rows = await cur.fetchall()
        return [role_from_record({"id": r[0], "name": r[1]}) for r in rows]

    async def create(self, name: str) -> Role:
        cur = await self._conn.execute(
            "INSERT INTO roles (name) VALUES (%s) RETURNING id, name",
            (name,),
        )
        r = await cur.fetchone()
        return role_from_record({"id": r[0], "name": r[1]})

    async def delete(self, role_id: int) -> None:
        await self._conn.execute("DELETE FROM roles WHERE id = %s", (role_id,))
