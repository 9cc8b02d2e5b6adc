"""Permission resolver port - remote computation of an actor's permissions."""

from typing import Protocol


class PermissionResolver(Protocol):
    """Port for the server-side permission resolution call."""

    async def resolve(self, access_token: str) -> list[str]:
        """Return ``action:subject`` keys for the token's bearer.

        Raises PermissionResolutionError when the call cannot be completed.
        """
        ...
