"""Auth gateway port - identity provider session handling."""

from collections.abc import Callable
from typing import Protocol

from ciecnow.application.dto.auth_session import AuthSession
from ciecnow.domain.value_objects import AuthEvent

AuthListener = Callable[[AuthEvent], None]


class AuthGateway(Protocol):
    """Port for sign-in state held by the identity provider."""

    async def get_session(self) -> AuthSession | None:
        """Current valid session, or None. Raises AuthenticationError on provider errors."""
        ...

    async def sign_out(self) -> None: ...

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register for sign-in/sign-out events; returns an unsubscribe callable."""
        ...
