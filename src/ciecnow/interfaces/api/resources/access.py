"""Access administration API resources - roles, permissions, users."""

import falcon.asgi

from ciecnow.application.dto.records import (
    permission_to_record,
    profile_to_record,
    role_to_record,
)
from ciecnow.application.use_cases.permission.resolve_user_permissions import (
    ResolveUserPermissionsUseCase,
)
from ciecnow.application.use_cases.role.create_role import CreateRoleUseCase
from ciecnow.application.use_cases.role.delete_role import DeleteRoleUseCase
from ciecnow.application.use_cases.role.update_role_permissions import (
    UpdateRolePermissionsUseCase,
)
from ciecnow.application.use_cases.user.list_users import ListUsersUseCase
from ciecnow.application.use_cases.user.update_user_access import UpdateUserAccessUseCase
from ciecnow.domain.exceptions import NotFound, PermissionDenied, ValidationError
from ciecnow.domain.value_objects import PermissionSet


async def _actor(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    resolve: ResolveUserPermissionsUseCase,
) -> PermissionSet | None:
    """Caller's permission set, or None after answering 401."""
    user = getattr(req.context, "user", None)
    if not user:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    return await resolve.permission_set(user.user_id)


def _parse_id(resp: falcon.asgi.Response, value: str, label: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": f"Invalid {label} ID"}
        return None


def _fail(resp: falcon.asgi.Response, exc: Exception) -> None:
    if isinstance(exc, PermissionDenied):
        resp.status = falcon.HTTP_403
        resp.media = {"error": "Permission denied"}
    elif isinstance(exc, NotFound):
        resp.status = falcon.HTTP_404
        resp.media = {"error": str(exc)}
    else:
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(exc)}


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolve_permissions: ResolveUserPermissionsUseCase,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolve = resolve_permissions
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if await _actor(req, resp, self._resolve) is None:
            return
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        resp.media = {"items": [role_to_record(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = await _actor(req, resp, self._resolve)
        if actor is None:
            return
        body = await req.get_media()
        name = body.get("name") if isinstance(body, dict) else None
        if not isinstance(name, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required field: name"}
            return
        try:
            role = await self._create.execute(actor, name)
        except (PermissionDenied, ValidationError) as exc:
            _fail(resp, exc)
            return
        resp.media = role_to_record(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        resolve_permissions: ResolveUserPermissionsUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._resolve = resolve_permissions
        self._delete = delete_role

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = await _actor(req, resp, self._resolve)
        if actor is None:
            return
        rid = _parse_id(resp, role_id, "role")
        if rid is None:
            return
        try:
            await self._delete.execute(actor, rid)
        except (PermissionDenied, NotFound, ValidationError) as exc:
            _fail(resp, exc)
            return
        resp.status = falcon.HTTP_204


class RolePermissionsResource:
    """PUT /v1/roles/{role_id}/permissions - replace the role's permissions."""

    def __init__(
        self,
        resolve_permissions: ResolveUserPermissionsUseCase,
        update_role_permissions: UpdateRolePermissionsUseCase,
    ) -> None:
        self._resolve = resolve_permissions
        self._update = update_role_permissions

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = await _actor(req, resp, self._resolve)
        if actor is None:
            return
        rid = _parse_id(resp, role_id, "role")
        if rid is None:
            return
        body = await req.get_media()
        ids = body.get("permission_ids") if isinstance(body, dict) else None
        if not isinstance(ids, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in ids
        ):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "permission_ids must be a list of integers"}
            return
        try:
            stored = await self._update.execute(actor, rid, ids)
        except (PermissionDenied, NotFound) as exc:
            _fail(resp, exc)
            return
        resp.media = {"role_id": rid, "permission_ids": stored}
        resp.status = falcon.HTTP_200


class UserAccessResource:
    """PATCH /v1/users/{user_id}/access - set role and approval."""

    def __init__(
        self,
        resolve_permissions: ResolveUserPermissionsUseCase,
        update_user_access: UpdateUserAccessUseCase,
    ) -> None:
        self._resolve = resolve_permissions
        self._update = update_user_access

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = await _actor(req, resp, self._resolve)
        if actor is None:
            return
        body = await req.get_media()
        try:
            role_id = body["role_id"]
            is_approved = body["is_approved"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        valid_role = role_id is None or (
            isinstance(role_id, int) and not isinstance(role_id, bool)
        )
        if not valid_role or not isinstance(is_approved, bool):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "role_id must be an integer or null, is_approved a boolean"}
            return
        try:
            profile = await self._update.execute(actor, user_id, role_id, is_approved)
        except (PermissionDenied, NotFound) as exc:
            _fail(resp, exc)
            return
        resp.media = {
            "id": profile.id,
            "role_id": profile.role_id,
            "is_approved": profile.is_approved,
        }
        resp.status = falcon.HTTP_200


class PermissionCatalogResource:
    """GET /v1/permissions - every permission a role can be granted."""

    def __init__(
        self,
        unit_of_work_factory: type,
        resolve_permissions: ResolveUserPermissionsUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolve = resolve_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if await _actor(req, resp, self._resolve) is None:
            return
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
        resp.media = {"items": [permission_to_record(p) for p in permissions]}
        resp.status = falcon.HTTP_200


class UsersResource:
    """GET /v1/users - profiles with role and approval, for user managers."""

    def __init__(
        self,
        resolve_permissions: ResolveUserPermissionsUseCase,
        list_users: ListUsersUseCase,
    ) -> None:
        self._resolve = resolve_permissions
        self._list = list_users

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = await _actor(req, resp, self._resolve)
        if actor is None:
            return
        try:
            profiles = await self._list.execute(actor)
        except PermissionDenied as exc:
            _fail(resp, exc)
            return
        resp.media = {"items": [profile_to_record(p) for p in profiles]}
        resp.status = falcon.HTTP_200
