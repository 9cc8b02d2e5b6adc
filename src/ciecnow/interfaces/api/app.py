"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

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

logger = logging.getLogger(__name__)


async def handle_unexpected_error(req, resp, ex, params) -> None:
    """Log the traceback and answer a plain 500."""
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    my_permissions_resource: MyPermissionsResource,
    roles_resource: RolesResource,
    role_resource: RoleResource,
    role_permissions_resource: RolePermissionsResource,
    user_access_resource: UserAccessResource,
    users_resource: UsersResource,
    permission_catalog_resource: PermissionCatalogResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/me/permissions", my_permissions_resource)
    app.add_route("/v1/roles", roles_resource)
    app.add_route("/v1/roles/{role_id}", role_resource)
    app.add_route("/v1/permissions", permission_catalog_resource)
    app.add_route("/v1/roles/{role_id}/permissions", role_permissions_resource)
    app.add_route("/v1/users", users_resource)
    app.add_route("/v1/users/{user_id}/access", user_access_resource)
    return app
