"""Unit tests for wire record conversion."""

import pytest

from ciecnow.application.dto.records import (
    permission_from_record,
    permission_keys_from_payload,
    permission_to_record,
    permissions_payload,
    profile_from_record,
    profile_to_record,
    role_from_record,
)
from ciecnow.domain.entities import Permission, Role, UserProfile


def test_profile_with_embedded_role() -> None:
    profile = profile_from_record({
        "id": "u-1",
        "full_name": "Ana",
        "is_approved": True,
        "role_id": 1,
        "roles": {"id": 1, "name": "SuperAdmin"},
    })
    assert profile == UserProfile(
        id="u-1", full_name="Ana", is_approved=True, role_id=1, role=Role(id=1, name="SuperAdmin")
    )
    assert profile.is_super


def test_profile_defaults_for_missing_optional_fields() -> None:
    profile = profile_from_record({"id": "u-2"})
    assert profile.full_name is None
    assert profile.is_approved is False
    assert profile.role_id is None
    assert profile.role is None


def test_profile_null_approval_is_false() -> None:
    assert profile_from_record({"id": "u", "is_approved": None}).is_approved is False


def test_profile_role_id_taken_from_join_when_missing() -> None:
    profile = profile_from_record({"id": "u", "roles": {"id": 4, "name": "Editor"}})
    assert profile.role_id == 4


def test_profile_round_trip_keeps_role() -> None:
    profile = UserProfile(id="u", full_name=None, is_approved=True, role_id=2, role=Role(2, "Coord"))
    assert profile_from_record(profile_to_record(profile)) == profile


@pytest.mark.parametrize("record", [None, [], {"full_name": "x"}, {"id": "u", "role_id": True}])
def test_profile_rejects_malformed(record) -> None:
    with pytest.raises(ValueError):
        profile_from_record(record)


def test_role_requires_id_and_name() -> None:
    assert role_from_record({"id": "3", "name": "Viewer"}) == Role(id=3, name="Viewer")
    with pytest.raises(ValueError, match="name"):
        role_from_record({"id": 3})


def test_permission_conversion() -> None:
    permission = permission_from_record({"id": 9, "action": "read", "subject": "Task"})
    assert permission == Permission(id=9, action="read", subject="Task")
    assert permission.key == "read:Task"
    assert permission_to_record(permission) == {"id": 9, "action": "read", "subject": "Task"}


def test_permission_keys_from_payload() -> None:
    assert permission_keys_from_payload({"permissions": ["read:Task"]}) == ["read:Task"]
    assert permission_keys_from_payload({"permissions": None}) == []
    assert permissions_payload(["a:b"]) == {"permissions": ["a:b"]}


@pytest.mark.parametrize(
    "payload",
    [{"error": "boom"}, {"permissions": "read:Task"}, {"permissions": [1, 2]}, ["read:Task"]],
)
def test_permission_keys_rejects_malformed(payload) -> None:
    with pytest.raises(ValueError):
        permission_keys_from_payload(payload)
