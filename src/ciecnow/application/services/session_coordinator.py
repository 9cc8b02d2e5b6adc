"""Session coordinator - session state machine, permissions and inactivity sign-out."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ciecnow.application.dto.auth_session import AuthSession
from ciecnow.application.ports import AuthGateway
from ciecnow.application.services.inactivity_monitor import (
    DEFAULT_INACTIVITY_TIMEOUT,
    InactivityMonitor,
)
from ciecnow.application.use_cases.permission.load_permission_set import (
    LoadPermissionSetUseCase,
)
from ciecnow.domain.entities import UserProfile
from ciecnow.domain.value_objects import (
    Action,
    ActivityKind,
    AuthEvent,
    PermissionSet,
    SessionState,
    Subject,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


@dataclass
class _Snapshot:
    """Result of one session load, applied atomically."""

    state: SessionState
    session: AuthSession | None = None
    profile: UserProfile | None = None
    permissions: PermissionSet = field(default_factory=PermissionSet.empty)


_LOGGED_OUT = _Snapshot(state=SessionState.LOGGED_OUT)


class SessionCoordinator:
    """Owns the actor's session, profile and permission set.

    refresh() is re-entrant: each call takes a generation number and only the
    most recently started refresh may publish its result.
    """

    def __init__(
        self,
        auth_gateway: AuthGateway,
        unit_of_work_factory: type,
        load_permission_set: LoadPermissionSetUseCase,
        inactivity_timeout: float = DEFAULT_INACTIVITY_TIMEOUT,
    ) -> None:
        self._auth = auth_gateway
        self._uow_factory = unit_of_work_factory
        self._load_permission_set = load_permission_set
        self._monitor = InactivityMonitor(inactivity_timeout, self._on_inactivity)

        self._state = SessionState.LOGGED_OUT
        self._session: AuthSession | None = None
        self._profile: UserProfile | None = None
        self._permissions = PermissionSet.empty()
        self._awaiting_password_reset = False
        self._signed_out_due_to_inactivity = False

        self._generation = 0
        self._listeners: list[StateListener] = []
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe_auth: Callable[[], None] | None = None

    # --- lifecycle ---

    async def start(self) -> None:
        """Subscribe to auth events and load the initial session."""
        if self._unsubscribe_auth is None:
            self._unsubscribe_auth = self._auth.subscribe(self._on_auth_event)
        await self.refresh()

    async def close(self) -> None:
        """Unsubscribe, stop the timer and cancel background refreshes."""
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None
        self._monitor.cancel_pending()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # --- read side ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is SessionState.LOADING_SESSION

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def permissions(self) -> PermissionSet:
        return self._permissions

    @property
    def is_super_admin(self) -> bool:
        return self._permissions.is_super

    @property
    def awaiting_password_reset(self) -> bool:
        return self._awaiting_password_reset

    @property
    def signed_out_due_to_inactivity(self) -> bool:
        return self._signed_out_due_to_inactivity

    @property
    def inactivity_timer_armed(self) -> bool:
        return self._monitor.armed

    def can(self, action: Action | str, subject: Subject | str) -> bool:
        return self._permissions.can(action, subject)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register for state transitions; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- commands ---

    async def refresh(self) -> None:
        """Reload session, profile and permissions."""
        self._generation += 1
        generation = self._generation
        self._set_state(SessionState.LOADING_SESSION)
        try:
            snapshot = await self._load()
        except Exception:
            logger.exception("Session refresh failed")
            snapshot = _LOGGED_OUT
        if generation != self._generation:
            logger.debug("Discarding superseded session refresh %d", generation)
            return
        self._apply(snapshot)

    async def sign_out(self, due_to_inactivity: bool = False) -> None:
        """Sign out at the identity provider and clear local state."""
        self._monitor.disarm()
        self._generation += 1
        try:
            await self._auth.sign_out()
        except Exception:
            logger.exception("Identity provider sign-out failed")
        if due_to_inactivity:
            self._signed_out_due_to_inactivity = True
        self._apply(_LOGGED_OUT)

    def dismiss_inactivity_notice(self) -> None:
        self._signed_out_due_to_inactivity = False

    def begin_password_recovery(self) -> None:
        self._awaiting_password_reset = True

    async def complete_password_reset(self) -> None:
        self._awaiting_password_reset = False
        await self.refresh()

    def record_activity(self, kind: ActivityKind | str) -> None:
        """Restart the inactivity countdown for a qualifying input event."""
        try:
            ActivityKind(kind)
        except ValueError:
            return
        if self._state is SessionState.ACTIVE:
            self._monitor.reset()

    async def on_visibility_change(self, visible: bool) -> None:
        if visible:
            await self.refresh()

    # --- internals ---

    def _on_auth_event(self, event: AuthEvent) -> None:
        if event not in (AuthEvent.SIGNED_IN, AuthEvent.SIGNED_OUT):
            return
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _on_inactivity(self) -> None:
        if self._state is not SessionState.ACTIVE:
            return
        user_id = self._session.user_id if self._session else None
        logger.info("Signing out %s after inactivity", user_id)
        await self.sign_out(due_to_inactivity=True)

    async def _load(self) -> _Snapshot:
        try:
            session = await self._auth.get_session()
        except Exception:
            logger.exception("Error fetching session")
            return _LOGGED_OUT
        if session is None:
            return _LOGGED_OUT

        if self._awaiting_password_reset:
            return _Snapshot(state=SessionState.AWAITING_PASSWORD_RESET, session=session)

        try:
            profile = await self._fetch_profile(session.user_id)
        except Exception:
            logger.exception("Error fetching profile for %s", session.user_id)
            return _LOGGED_OUT

        if profile is None or not profile.is_approved:
            return _Snapshot(
                state=SessionState.PENDING_APPROVAL, session=session, profile=profile
            )

        permissions = await self._load_permission_set.execute(profile, session.access_token)
        return _Snapshot(
            state=SessionState.ACTIVE,
            session=session,
            profile=profile,
            permissions=permissions,
        )

    async def _fetch_profile(self, user_id: str) -> UserProfile | None:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_id(user_id)
            if profile is None or profile.role_id is None or profile.role is not None:
                return profile
            try:
                profile.role = await uow.roles.get_by_id(profile.role_id)
            except Exception:
                logger.warning("Could not load role %s for %s", profile.role_id, user_id)
        return profile

    def _apply(self, snapshot: _Snapshot) -> None:
        self._session = snapshot.session
        self._profile = snapshot.profile
        self._permissions = snapshot.permissions
        if snapshot.state is SessionState.ACTIVE:
            self._monitor.arm()
        else:
            self._monitor.disarm()
        self._set_state(snapshot.state)

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        logger.info("Session state %s -> %s", self._state, state)
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session state listener failed")
