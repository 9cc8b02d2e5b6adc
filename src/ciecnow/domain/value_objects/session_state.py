"""Session lifecycle states and activity kinds."""

from enum import StrEnum


class SessionState(StrEnum):
    """States of the session coordinator."""

    LOGGED_OUT = "logged_out"
    LOADING_SESSION = "loading_session"
    AWAITING_PASSWORD_RESET = "awaiting_password_reset"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"


class ActivityKind(StrEnum):
    """User input events that count as activity."""

    POINTER_MOVE = "pointer_move"
    KEY_PRESS = "key_press"
    CLICK = "click"
    SCROLL = "scroll"
    TOUCH = "touch"


class AuthEvent(StrEnum):
    """Identity provider notifications that trigger a session refresh."""

    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"
