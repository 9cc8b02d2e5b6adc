"""Load permission set use case - client-side permission computation."""

import logging

from ciecnow.application.ports import PermissionResolver
from ciecnow.domain.entities import UserProfile
from ciecnow.domain.value_objects import PermissionSet

logger = logging.getLogger(__name__)


class LoadPermissionSetUseCase:
    """Compute an actor's permission set once per session load.

    The remote resolver is tried first. If it fails, the role's links are read
    directly from the tables. If that fails too the set is empty.

    The table path repeats what ResolveUserPermissionsUseCase does server-side;
    both read PermissionRepository.list_for_role and must stay in step.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, profile: UserProfile | None, access_token: str) -> PermissionSet:
        """Resolve permissions for profile. Never raises."""
        if profile is None:
            return PermissionSet.empty()
        if profile.is_super:
            return PermissionSet.superuser()

        try:
            keys = await self._resolver.resolve(access_token)
            return PermissionSet.from_keys(keys)
        except Exception as exc:
            logger.warning(
                "Permission resolution failed for %s, using table fallback: %s",
                profile.id,
                exc,
            )

        try:
            return await self._load_from_tables(profile)
        except Exception:
            logger.exception("Permission fallback failed for %s", profile.id)
            return PermissionSet.empty()

    async def _load_from_tables(self, profile: UserProfile) -> PermissionSet:
        if profile.role_id is None:
            return PermissionSet.empty()
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_for_role(profile.role_id)
        return PermissionSet.from_keys(p.key for p in permissions)
