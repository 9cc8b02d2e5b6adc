"""Unit tests for domain exceptions."""

import pytest

from ciecnow.domain.exceptions import (
    AuthenticationError,
    CiecNowError,
    NotFound,
    PermissionDenied,
    PermissionResolutionError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_type",
    [PermissionDenied, NotFound, ValidationError, PermissionResolutionError, AuthenticationError],
)
def test_inherits_ciecnow_error(exc_type) -> None:
    """Every domain exception is a CiecNowError."""
    assert issubclass(exc_type, CiecNowError)


def test_raise_not_found_catchable_as_ciecnow_error() -> None:
    """NotFound can be caught as CiecNowError."""
    with pytest.raises(CiecNowError):
        raise NotFound("Role", 42)


def test_exception_message_preserved() -> None:
    """Exception message is preserved when raised."""
    msg = "Missing permission manage:Roles"
    with pytest.raises(PermissionDenied, match=msg):
        raise PermissionDenied(msg)


def test_not_found_message_is_readable() -> None:
    """NotFound renders entity and id as a sentence, not a tuple."""
    exc = NotFound("Role", 5)
    assert str(exc) == "Role 5 not found"
    assert exc.entity == "Role"
    assert exc.identifier == 5
    assert str(NotFound("User")) == "User not found"
