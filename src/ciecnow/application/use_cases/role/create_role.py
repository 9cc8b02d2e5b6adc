"""Create role use case."""

from ciecnow.domain.entities import Role
from ciecnow.domain.exceptions import ValidationError
from ciecnow.domain.value_objects import Action, PermissionSet, Subject


class CreateRoleUseCase:
    """Create a role with no permissions. Actor must manage Roles."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: PermissionSet, name: str) -> Role:
        actor.require(Action.MANAGE, Subject.ROLES)
        name = name.strip()
        if not name:
            raise ValidationError("Role name must not be empty")
        async with self._uow_factory() as uow:
            return await uow.roles.create(name)
