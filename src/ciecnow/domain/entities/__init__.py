"""Domain entities."""

from ciecnow.domain.entities.permission import Permission
from ciecnow.domain.entities.role import SUPER_ROLE_ID, SUPER_ROLE_NAMES, Role, is_super_role
from ciecnow.domain.entities.role_permission import RolePermission
from ciecnow.domain.entities.user_profile import UserProfile

__all__ = [
    "Permission",
    "Role",
    "RolePermission",
    "SUPER_ROLE_ID",
    "SUPER_ROLE_NAMES",
    "UserProfile",
    "is_super_role",
]
