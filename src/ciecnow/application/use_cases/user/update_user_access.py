"""Update user access use case - role reassignment and approval."""

from ciecnow.domain.entities import UserProfile
from ciecnow.domain.exceptions import NotFound
from ciecnow.domain.value_objects import Action, PermissionSet, Subject


class UpdateUserAccessUseCase:
    """Set a user's role and approval flag. Actor must manage Users."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: PermissionSet,
        user_id: str,
        role_id: int | None,
        is_approved: bool,
    ) -> UserProfile:
        actor.require(Action.MANAGE, Subject.USERS)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(user_id)
            if not profile:
                raise NotFound("User", user_id)
            role = None
            if role_id is not None:
                role = await uow.roles.get_by_id(role_id)
                if not role:
                    raise NotFound("Role", role_id)
            await uow.profiles.update_access(user_id, role_id, is_approved)

        profile.role_id = role_id
        profile.role = role
        profile.is_approved = is_approved
        return profile
