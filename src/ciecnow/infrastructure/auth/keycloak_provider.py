"""Keycloak OIDC - token validation for the API and session handling for clients."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from ciecnow.application.dto.auth_session import AuthSession
from ciecnow.application.ports import AuthListener
from ciecnow.domain.exceptions import AuthenticationError
from ciecnow.domain.value_objects import AuthEvent

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    email: str | None
    username: str | None
    realm_roles: list[str]


def create_openid_client(
    server_url: str,
    realm: str,
    client_id: str,
    client_secret: str = "",
) -> KeycloakOpenID:
    return KeycloakOpenID(
        server_url=server_url,
        realm_name=realm,
        client_id=client_id,
        client_secret_key=client_secret,
    )


class KeycloakProvider:
    """Keycloak OIDC - validates bearer tokens and extracts user info."""

    def __init__(self, client: KeycloakOpenID) -> None:
        self._keycloak = client

    async def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return user info or None when it is not active."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )


class KeycloakAuthGateway:
    """Client-side session held against Keycloak.

    Keeps the token pair of the signed-in actor, refreshes it when the access
    token is no longer active, and notifies listeners on sign-in/sign-out.
    """

    def __init__(self, client: KeycloakOpenID) -> None:
        self._keycloak = client
        self._tokens: dict | None = None
        self._listeners: list[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    async def sign_in(self, username: str, password: str) -> AuthSession:
        """Password grant. Raises AuthenticationError when rejected."""
        try:
            self._tokens = await self._keycloak.a_token(username, password)
        except KeycloakError as exc:
            raise AuthenticationError("Invalid credentials") from exc
        session = await self.get_session()
        if session is None:
            raise AuthenticationError("Identity provider issued an inactive token")
        self._emit(AuthEvent.SIGNED_IN)
        return session

    async def get_session(self) -> AuthSession | None:
        if not self._tokens:
            return None
        try:
            info = await self._keycloak.a_introspect(self._tokens["access_token"])
            if not info.get("active"):
                info = await self._refresh()
        except KeycloakError as exc:
            raise AuthenticationError("Session lookup failed") from exc
        if not info or not info.get("active"):
            self._tokens = None
            return None
        return AuthSession(
            user_id=info.get("sub", ""),
            access_token=self._tokens["access_token"],
            refresh_token=self._tokens.get("refresh_token"),
            email=info.get("email"),
            username=info.get("preferred_username"),
        )

    async def _refresh(self) -> dict | None:
        refresh_token = self._tokens.get("refresh_token") if self._tokens else None
        if not refresh_token:
            return None
        try:
            self._tokens = await self._keycloak.a_refresh_token(refresh_token)
        except KeycloakError as exc:
            logger.info("Refresh token rejected: %s", exc)
            return None
        return await self._keycloak.a_introspect(self._tokens["access_token"])

    async def sign_out(self) -> None:
        refresh_token = self._tokens.get("refresh_token") if self._tokens else None
        self._tokens = None
        if refresh_token:
            try:
                await self._keycloak.a_logout(refresh_token)
            except KeycloakError as exc:
                logger.warning("Keycloak logout failed: %s", exc)
        self._emit(AuthEvent.SIGNED_OUT)
