"""Role entity for RBAC."""

import re
from dataclasses import dataclass

SUPER_ROLE_ID = 1
SUPER_ROLE_NAMES = frozenset({"superadmin", "masteradmin"})

_WHITESPACE = re.compile(r"\s+")


def normalize_role_name(name: str) -> str:
    """Lower-case and strip all whitespace: ``"Super Admin"`` -> ``"superadmin"``."""
    return _WHITESPACE.sub("", name).lower()


def is_super_role(role_id: int | None, role_name: str | None) -> bool:
    """Whether the role bypasses all capability checks."""
    if role_id == SUPER_ROLE_ID:
        return True
    if not role_name:
        return False
    return normalize_role_name(role_name) in SUPER_ROLE_NAMES


@dataclass
class Role:
    """Role - a named bundle of permissions."""

    id: int
    name: str

    @property
    def is_super(self) -> bool:
        return is_super_role(self.id, self.name)
