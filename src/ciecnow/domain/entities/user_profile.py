"""User profile entity - the actor whose permissions are evaluated."""

from dataclasses import dataclass

from ciecnow.domain.entities.role import Role, is_super_role


@dataclass
class UserProfile:
    """Profile created at sign-up; role and approval managed by administrators."""

    id: str
    full_name: str | None = None
    is_approved: bool = False
    role_id: int | None = None
    role: Role | None = None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None

    @property
    def is_super(self) -> bool:
        return is_super_role(self.role_id, self.role_name)
