# gymbook/errors/base.py


class GymBookError(Exception):
    """Base class for expected business failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GymBookError):
    """A referenced record does not exist."""
    pass


class ConflictError(GymBookError):
    """The request conflicts with the current state of a record."""
    pass


class ValidationFailure(GymBookError):
    """Input passed schema checks but is not acceptable."""
    pass


class AuthenticationError(GymBookError):
    """Credentials did not match."""
    pass


class PermissionDenied(GymBookError):
    """The principal may not act on this record."""
    pass
