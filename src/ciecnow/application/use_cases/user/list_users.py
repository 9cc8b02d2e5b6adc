"""List users use case - the administration roster."""

from ciecnow.domain.entities import UserProfile
from ciecnow.domain.value_objects import Action, PermissionSet, Subject


class ListUsersUseCase:
    """All profiles with their roles, for actors who manage Users."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: PermissionSet) -> list[UserProfile]:
        actor.require(Action.MANAGE, Subject.USERS)
        async with self._uow_factory() as uow:
            return await uow.profiles.list_all()
