"""PostgreSQL permission repository implementation."""

from psycopg import AsyncConnection

from ciecnow.application.dto.records import permission_from_record
from ciecnow.domain.entities import Permission, RolePermission


class PostgresPermissionRepository:
    """Permission catalog and role-permission links."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_all(self) -> list[Permission]:
        """List the whole permission catalog."""
        cur = await self._conn.execute(
            "SELECT id, action, subject FROM permissions ORDER BY id"
        )
        rows = await cur.fetchall()
        return [
            permission_from_record({"id": r[0], "action": r[1], "subject": r[2]})
            for r in rows
        ]

    async def list_for_role(self, role_id: int) -> list[Permission]:
        """Permissions linked to role, joined through rolepermissions."""
        cur = await self._conn.execute(
            "SELECT p.id, p.action, p.subject FROM permissions p "
            "JOIN rolepermissions rp ON rp.permission_id = p.id "
            "WHERE rp.role_id = %s ORDER BY p.id",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [
            permission_from_record({"id": r[0], "action": r[1], "subject": r[2]})
            for r in rows
        ]

    async def replace_for_role(self, role_id: int, permission_ids: list[int]) -> None:
        """Delete all links for role, then insert the given ones."""
        await self._conn.execute(
            "DELETE FROM rolepermissions WHERE role_id = %s",
            (role_id,),
        )
        if not permission_ids:
            return
        links = [RolePermission(role_id=role_id, permission_id=pid) for pid in permission_ids]
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO rolepermissions (role_id, permission_id) VALUES (%s, %s)",
                [(link.role_id, link.permission_id) for link in links],
            )
