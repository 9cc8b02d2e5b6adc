"""Boundary conversion between backend wire records and domain entities.

Wire records are the snake_case rows returned by the hosted tables and the
permission resolution endpoint. Every converter is total over well-formed
records and raises ValueError on anything else.
"""

from typing import Any, NotRequired, TypedDict

from ciecnow.domain.entities import Permission, Role, UserProfile


class RoleRecord(TypedDict):
    id: int
    name: str


class PermissionRecord(TypedDict):
    id: int
    action: str
    subject: str


class ProfileRecord(TypedDict):
    id: str
    full_name: str | None
    is_approved: bool
    role_id: int | None
    roles: NotRequired[RoleRecord | None]


class PermissionsPayload(TypedDict):
    permissions: list[str]


def _require(record: Any, *fields: str) -> None:
    if not isinstance(record, dict):
        raise ValueError(f"Expected a record, got {type(record).__name__}")
    missing = [f for f in fields if f not in record]
    if missing:
        raise ValueError(f"Record is missing fields: {', '.join(missing)}")


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer id, got {value!r}")
    return int(value)


def role_from_record(record: RoleRecord) -> Role:
    _require(record, "id", "name")
    return Role(id=int(record["id"]), name=str(record["name"]))


def role_to_record(role: Role) -> RoleRecord:
    return {"id": role.id, "name": role.name}


def permission_from_record(record: PermissionRecord) -> Permission:
    _require(record, "id", "action", "subject")
    return Permission(
        id=int(record["id"]),
        action=str(record["action"]),
        subject=str(record["subject"]),
    )


def permission_to_record(permission: Permission) -> PermissionRecord:
    return {
        "id": permission.id,
        "action": permission.action,
        "subject": permission.subject,
    }


def profile_from_record(record: ProfileRecord) -> UserProfile:
    """Convert a profile row, including an embedded ``roles`` join when present."""
    _require(record, "id")
    nested = record.get("roles")
    role = role_from_record(nested) if nested else None
    role_id = _optional_int(record.get("role_id"))
    if role_id is None and role is not None:
        role_id = role.id
    return UserProfile(
        id=str(record["id"]),
        full_name=record.get("full_name"),
        is_approved=bool(record.get("is_approved") or False),
        role_id=role_id,
        role=role,
    )


def profile_to_record(profile: UserProfile) -> ProfileRecord:
    record: ProfileRecord = {
        "id": profile.id,
        "full_name": profile.full_name,
        "is_approved": profile.is_approved,
        "role_id": profile.role_id,
    }
    if profile.role is not None:
        record["roles"] = role_to_record(profile.role)
    return record


def permission_keys_from_payload(payload: Any) -> list[str]:
    """Extract ``permissions`` from a resolution response body."""
    _require(payload, "permissions")
    keys = payload["permissions"]
    if keys is None:
        return []
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        raise ValueError("permissions must be a list of strings")
    return list(keys)


def permissions_payload(keys: list[str]) -> PermissionsPayload:
    return {"permissions": list(keys)}
