"""Pytest fixtures for CIEC Now tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date

import pytest

from ciecnow.application.dto.auth_session import AuthSession
from ciecnow.domain.entities import Permission, Role, RolePermission, UserProfile
from ciecnow.domain.value_objects import AuthEvent


# --- Fake repositories ---


class FakeProfileRepository:
    """In-memory profile repository."""

    def __init__(self, roles: "FakeRoleRepository") -> None:
        self._roles = roles
        self._by_id: dict[str, UserProfile] = {}

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        stored = self._by_id.get(user_id)
        if not stored:
            return None
        role = self._roles._by_id.get(stored.role_id) if stored.role_id else None
        return UserProfile(
            id=stored.id,
            full_name=stored.full_name,
            is_approved=stored.is_approved,
            role_id=stored.role_id,
            role=role,
        )

    async def list_all(self) -> list[UserProfile]:
        return [await self.get_by_id(uid) for uid in sorted(self._by_id)]

    async def update_access(
        self, user_id: str, role_id: int | None, is_approved: bool
    ) -> None:
        profile = self._by_id[user_id]
        profile.role_id = role_id
        profile.is_approved = is_approved

    def add_profile(self, profile: UserProfile) -> None:
        """Helper to add profile for tests."""
        self._by_id[profile.id] = profile


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[int, Role] = {}

    async def get_by_id(self, role_id: int) -> Role | None:
        return self._by_id.get(role_id)

    async def list_all(self) -> list[Role]:
        return sorted(self._by_id.values(), key=lambda r: r.name)

    async def create(self, name: str) -> Role:
        role = Role(id=max(self._by_id, default=0) + 1, name=name)
        self._by_id[role.id] = role
        return role

    async def delete(self, role_id: int) -> None:
        self._by_id.pop(role_id, None)

    def add_role(self, role: Role) -> None:
        """Helper to add role for tests."""
        self._by_id[role.id] = role


class FakePermissionRepository:
    """In-memory permission catalog and role links."""

    def __init__(self) -> None:
        self._catalog: dict[int, Permission] = {}
        self._links: set[RolePermission] = set()

    async def list_all(self) -> list[Permission]:
        return [self._catalog[pid] for pid in sorted(self._catalog)]

    async def list_for_role(self, role_id: int) -> list[Permission]:
        ids = sorted(link.permission_id for link in self._links if link.role_id == role_id)
        return [self._catalog[pid] for pid in ids if pid in self._catalog]

    async def replace_for_role(self, role_id: int, permission_ids: list[int]) -> None:
        self._links = {link for link in self._links if link.role_id != role_id}
        self._links.update(RolePermission(role_id, pid) for pid in permission_ids)

    def add_permission(self, permission: Permission) -> None:
        self._catalog[permission.id] = permission

    def link(self, role_id: int, *permission_ids: int) -> None:
        self._links.update(RolePermission(role_id, pid) for pid in permission_ids)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.profiles = FakeProfileRepository(self.roles)
        self.permissions = FakePermissionRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


SUPER_ADMIN = Role(id=1, name="SuperAdmin")
COORDINATOR = Role(id=2, name="Coordinador")
MASTER_ADMIN = Role(id=3, name="Master Admin")
USER_ADMIN = Role(id=4, name="Administrador de Usuarios")

CATALOG = [
    Permission(id=1, action="create", subject="Meeting"),
    Permission(id=2, action="read", subject="Meeting"),
    Permission(id=3, action="update", subject="Meeting"),
    Permission(id=4, action="delete", subject="Meeting"),
    Permission(id=5, action="read", subject="Task"),
    Permission(id=6, action="manage", subject="Users"),
    Permission(id=7, action="manage", subject="Roles"),
]


def seeded_uow() -> FakeUnitOfWork:
    """UoW with roles, catalog, links and a few profiles."""
    uow = FakeUnitOfWork()
    for role in (SUPER_ADMIN, COORDINATOR, MASTER_ADMIN, USER_ADMIN):
        uow.roles.add_role(Role(id=role.id, name=role.name))
    for permission in CATALOG:
        uow.permissions.add_permission(permission)
    uow.permissions.link(COORDINATOR.id, 1, 2, 5)
    uow.permissions.link(USER_ADMIN.id, 6, 7)
    uow.profiles.add_profile(
        UserProfile(id="super-1", full_name="Ana", is_approved=True, role_id=1)
    )
    uow.profiles.add_profile(
        UserProfile(id="coord-1", full_name="Luis", is_approved=True, role_id=2)
    )
    uow.profiles.add_profile(
        UserProfile(id="master-1", full_name="Rosa", is_approved=True, role_id=3)
    )
    uow.profiles.add_profile(
        UserProfile(id="admin-1", full_name="Eva", is_approved=True, role_id=4)
    )
    uow.profiles.add_profile(
        UserProfile(id="pending-1", full_name="Juan", is_approved=False, role_id=2)
    )
    uow.profiles.add_profile(
        UserProfile(id="norole-1", full_name="Sara", is_approved=True, role_id=None)
    )
    return uow


def make_uow_factory(uow: FakeUnitOfWork) -> Callable:
    """Factory yielding the same UoW for every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow
        await uow.commit()

    return _factory


# --- Fake adapters ---


class FakeAuthGateway:
    """In-memory identity provider session."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self.session = session
        self.error: Exception | None = None
        self.sign_out_calls = 0
        self._listeners: list = []

    async def get_session(self) -> AuthSession | None:
        if self.error:
            raise self.error
        return self.session

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        self.session = None

    def subscribe(self, listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class MemoryStore:
    """In-memory KeyValueStore."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def session_for(user_id: str) -> AuthSession:
    return AuthSession(user_id=user_id, access_token=f"token-{user_id}", refresh_token="r")


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Seeded in-memory UnitOfWork for each test."""
    return seeded_uow()


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager with the seeded FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def mock_permission_resolver():
    """AsyncMock for PermissionResolver - returns the coordinator's keys by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.resolve.return_value = ["create:Meeting", "read:Meeting", "read:Task"]
    return mock


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    return lambda: date(2025, 3, 15)
