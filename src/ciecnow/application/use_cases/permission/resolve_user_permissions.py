"""Resolve user permissions use case - server side of permission resolution."""

import logging

from ciecnow.domain.entities import Permission, is_super_role
from ciecnow.domain.value_objects import PermissionSet

logger = logging.getLogger(__name__)


class ResolveUserPermissionsUseCase:
    """List ``action:subject`` keys for a user.

    Applies the same super-role rule as the client: a super-role actor gets the
    whole permission catalog. LoadPermissionSetUseCase repeats the role join as
    its client-side fallback.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str) -> list[str]:
        """Wire keys for user, sorted and deduplicated."""
        _, permissions = await self._resolve(user_id)
        return sorted({p.key for p in permissions})

    async def permission_set(self, user_id: str) -> PermissionSet:
        """PermissionSet for an API caller, with the super-role bypass."""
        is_super, permissions = await self._resolve(user_id)
        if is_super:
            return PermissionSet.superuser()
        return PermissionSet.from_keys(p.key for p in permissions)

    async def _resolve(self, user_id: str) -> tuple[bool, list[Permission]]:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(user_id)
            if not profile:
                logger.info("No profile for %s, returning no permissions", user_id)
                return False, []

            role_name = profile.role_name
            if profile.role_id is not None and role_name is None:
                role = await uow.roles.get_by_id(profile.role_id)
                role_name = role.name if role else None

            if is_super_role(profile.role_id, role_name):
                return True, await uow.permissions.list_all()
            if profile.role_id is None:
                return False, []
            return False, await uow.permissions.list_for_role(profile.role_id)
