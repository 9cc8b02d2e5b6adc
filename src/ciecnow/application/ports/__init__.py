"""Application ports - interfaces for external adapters."""

from ciecnow.application.ports.auth_gateway import AuthGateway, AuthListener
from ciecnow.application.ports.key_value_store import KeyValueStore
from ciecnow.application.ports.permission_resolver import PermissionResolver
from ciecnow.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AuthGateway",
    "AuthListener",
    "KeyValueStore",
    "PermissionResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
