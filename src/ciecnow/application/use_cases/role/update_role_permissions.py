"""Update role permissions use case."""

from ciecnow.domain.exceptions import NotFound
from ciecnow.domain.value_objects import Action, PermissionSet, Subject


class UpdateRolePermissionsUseCase:
    """Replace the permission links of a role in one unit of work."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: PermissionSet, role_id: int, permission_ids: list[int]
    ) -> list[int]:
        """Return the stored permission ids. Actor must manage Roles."""
        actor.require(Action.MANAGE, Subject.ROLES)
        wanted = sorted(set(permission_ids))
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            known = {p.id for p in await uow.permissions.list_all()}
            unknown = [pid for pid in wanted if pid not in known]
            if unknown:
                raise NotFound("Permission", ", ".join(str(pid) for pid in unknown))
            await uow.permissions.replace_for_role(role_id, wanted)
        return wanted
