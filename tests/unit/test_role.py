"""Unit tests for the super-role predicate."""

import pytest

from ciecnow.domain.entities import Role, UserProfile, is_super_role
from ciecnow.domain.entities.role import normalize_role_name


@pytest.mark.parametrize(
    "name",
    ["SuperAdmin", "superadmin", "Super Admin", " SUPER  ADMIN ", "MasterAdmin", "master admin", "Master\tAdmin"],
)
def test_accepted_super_role_spellings(name: str) -> None:
    """Both legacy spellings match after lower-casing and removing whitespace."""
    assert is_super_role(role_id=99, role_name=name)


@pytest.mark.parametrize("name", ["Admin", "Super-Admin", "superadministrator", "", None])
def test_other_names_are_not_super(name) -> None:
    assert not is_super_role(role_id=5, role_name=name)


def test_reserved_identifier_is_super_regardless_of_name() -> None:
    assert is_super_role(role_id=1, role_name="Coordinador")
    assert is_super_role(role_id=1, role_name=None)


def test_normalize_role_name() -> None:
    assert normalize_role_name(" Master \n Admin ") == "masteradmin"


def test_role_and_profile_expose_super_flag() -> None:
    role = Role(id=7, name="Super Admin")
    assert role.is_super
    profile = UserProfile(id="u", is_approved=True, role_id=7, role=role)
    assert profile.is_super
    assert profile.role_name == "Super Admin"
    assert not UserProfile(id="v", role_id=None).is_super
