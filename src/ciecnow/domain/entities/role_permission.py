"""Role-permission link."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RolePermission:
    """Many-to-many link between Role and Permission."""

    role_id: int
    permission_id: int
