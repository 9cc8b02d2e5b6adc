"""Domain exceptions."""


class CiecNowError(Exception):
    """Base exception for CIEC Now."""

    pass


class PermissionDenied(CiecNowError):
    """Actor does not have permission for the requested action."""

    pass


class NotFound(CiecNowError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: object = None) -> None:
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} {identifier} not found")


class ValidationError(CiecNowError):
    """Validation failed for input data."""

    pass


class PermissionResolutionError(CiecNowError):
    """Remote permission resolution failed or returned an unusable body."""

    pass


class AuthenticationError(CiecNowError):
    """Identity provider rejected the credentials or the session."""

    pass
