"""Repository ports."""

from ciecnow.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from ciecnow.application.ports.repositories.profile_repository import ProfileRepository
from ciecnow.application.ports.repositories.role_repository import RoleRepository

__all__ = [
    "PermissionRepository",
    "ProfileRepository",
    "RoleRepository",
]
