"""Authenticated session DTO."""

from dataclasses import dataclass


@dataclass
class AuthSession:
    """Session held for the signed-in actor."""

    user_id: str
    access_token: str
    refresh_token: str | None = None
    email: str | None = None
    username: str | None = None
