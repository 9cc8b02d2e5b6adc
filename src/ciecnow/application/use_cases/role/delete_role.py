"""Delete role use case."""

from ciecnow.domain.exceptions import NotFound, ValidationError
from ciecnow.domain.value_objects import Action, PermissionSet, Subject


class DeleteRoleUseCase:
    """Delete a role and its permission links. The super-role is protected."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: PermissionSet, role_id: int) -> None:
        actor.require(Action.MANAGE, Subject.ROLES)
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            if role.is_super:
                raise ValidationError("The super-role cannot be deleted")
            await uow.permissions.replace_for_role(role_id, [])
            await uow.roles.delete(role_id)
