"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

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
from ciecnow.interfaces.api.app import create_app
from ciecnow.interfaces.api.middleware.auth import RequestUser
from ciecnow.interfaces.api.middleware.cors import CORSMiddleware
from ciecnow.interfaces.api.resources.access import (
    PermissionCatalogResource,
    RolePermissionsResource,
    RoleResource,
    RolesResource,
    UserAccessResource,
    UsersResource,
)
from ciecnow.interfaces.api.resources.health import HealthResource
from ciecnow.interfaces.api.resources.permissions import MyPermissionsResource

TEST_USER_HEADER = "X-Test-User"


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-User header."""

    async def process_request(self, req, resp):
        user_id = req.get_header(TEST_USER_HEADER)
        req.context.user = RequestUser(user_id=user_id) if user_id else None


@pytest.fixture
def app(uow_factory):
    """Falcon ASGI app with API resources for testing."""
    resolve = ResolveUserPermissionsUseCase(unit_of_work_factory=uow_factory)
    return create_app(
        health_resource=HealthResource(),
        my_permissions_resource=MyPermissionsResource(resolve),
        roles_resource=RolesResource(uow_factory, resolve, CreateRoleUseCase(uow_factory)),
        role_resource=RoleResource(resolve, DeleteRoleUseCase(uow_factory)),
        role_permissions_resource=RolePermissionsResource(
            resolve, UpdateRolePermissionsUseCase(uow_factory)
        ),
        user_access_resource=UserAccessResource(
            resolve, UpdateUserAccessUseCase(uow_factory)
        ),
        users_resource=UsersResource(resolve, ListUsersUseCase(uow_factory)),
        permission_catalog_resource=PermissionCatalogResource(uow_factory, resolve),
        middleware=[CORSMiddleware(["https://ciec.example"]), AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
