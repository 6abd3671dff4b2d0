# gymbook/errors/account_errors.py
from gymbook.errors.base import NotFoundError, ConflictError, AuthenticationError


class EmailAlreadyExists(ConflictError):
    def __init__(self):
        super().__init__("User with this email already exists.")


class InvalidCredentials(AuthenticationError):
    def __init__(self):
        super().__init__("Invalid email or password")


class GymAdminNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Gym admin not found")
