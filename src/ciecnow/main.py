"""Application entry point and composition root."""

import argparse
import logging
import sys

from ciecnow import __version__
from ciecnow.application.services.app_context import AppContext
from ciecnow.application.services.period_selector import PeriodSelector
from ciecnow.application.services.session_coordinator import SessionCoordinator
from ciecnow.application.use_cases.permission.load_permission_set import (
    LoadPermissionSetUseCase,
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
from ciecnow.config import Settings, get_settings
from ciecnow.infrastructure.auth.keycloak_provider import (
    KeycloakAuthGateway,
    KeycloakProvider,
    create_openid_client,
)
from ciecnow.infrastructure.permission.http_permission_resolver import (
    HttpPermissionResolver,
)
from ciecnow.infrastructure.persistence.postgres.connection import create_pool, ping
from ciecnow.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from ciecnow.infrastructure.storage.json_store import JsonFileStore
from ciecnow.interfaces.api.app import create_app
from ciecnow.interfaces.api.middleware.auth import AuthMiddleware
from ciecnow.interfaces.api.middleware.cors import CORSMiddleware
from ciecnow.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Root logger at level, one stderr handler."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def create_ciecnow_app(settings: Settings | None = None):
    """Composition root - build the Falcon app serving permission resolution."""
    settings = settings or get_settings()
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            create_openid_client(
                server_url=settings.keycloak_url,
                realm=settings.keycloak_realm,
                client_id=settings.keycloak_client_id,
                client_secret=settings.keycloak_client_secret,
            )
        )
        if settings.keycloak_client_secret
        else None
    )

    resolve_permissions = ResolveUserPermissionsUseCase(uow_factory)
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

    return create_app(
        health_resource=HealthResource(lambda: ping(pool)),
        my_permissions_resource=MyPermissionsResource(resolve_permissions),
        roles_resource=RolesResource(
            uow_factory, resolve_permissions, CreateRoleUseCase(uow_factory)
        ),
        role_resource=RoleResource(resolve_permissions, DeleteRoleUseCase(uow_factory)),
        role_permissions_resource=RolePermissionsResource(
            resolve_permissions, UpdateRolePermissionsUseCase(uow_factory)
        ),
        user_access_resource=UserAccessResource(
            resolve_permissions, UpdateUserAccessUseCase(uow_factory)
        ),
        users_resource=UsersResource(resolve_permissions, ListUsersUseCase(uow_factory)),
        permission_catalog_resource=PermissionCatalogResource(uow_factory, resolve_permissions),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def build_app_context(settings: Settings | None = None) -> tuple[AppContext, KeycloakAuthGateway]:
    """Composition root for a client: session coordinator and period selector.

    The caller opens the returned context's pool by calling ``start()``.
    """
    settings = settings or get_settings()
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    gateway = KeycloakAuthGateway(
        create_openid_client(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
    )
    resolver = HttpPermissionResolver(
        settings.permissions_api_url, timeout=settings.permissions_api_timeout
    )
    session = SessionCoordinator(
        auth_gateway=gateway,
        unit_of_work_factory=uow_factory,
        load_permission_set=LoadPermissionSetUseCase(uow_factory, resolver),
        inactivity_timeout=settings.inactivity_timeout_seconds,
    )
    period = PeriodSelector(
        JsonFileStore(settings.local_state_path),
        start_month=settings.fiscal_start_month,
        floor_year=settings.fiscal_history_floor_year,
    )
    context = AppContext(
        session=session,
        period=period,
        openers=[pool.open],
        closers=[resolver.aclose, pool.close],
    )
    return context, gateway


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_ciecnow_app(), host=host, port=port)


def _print_period(settings: Settings, year: int | None) -> None:
    selector = PeriodSelector(
        JsonFileStore(settings.local_state_path),
        start_month=settings.fiscal_start_month,
        floor_year=settings.fiscal_history_floor_year,
    )
    if year is not None:
        selector.set_start_year(year)
    print(f"Periodo {selector.period_label}")
    print(f"  start: {selector.start_date.isoformat()}")
    print(f"  end:   {selector.end_date.isoformat(timespec='milliseconds')}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="ciecnow", description="CIEC Now access core")
    parser.add_argument("--version", action="version", version=f"ciecnow {__version__}")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the permission resolution API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    period = sub.add_parser("period", help="Show or select the fiscal period")
    period.add_argument("--set", type=int, dest="year", help="Persist a new start year")

    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        run_server(args.host, args.port)
    elif args.command == "period":
        _print_period(settings, args.year)
    else:
        print(f"CIEC Now v{__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
