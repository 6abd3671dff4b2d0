# gymbook/errors/booking_errors.py
from gymbook.errors.base import NotFoundError, ConflictError


class SessionNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Session not found")


class UserNotFound(NotFoundError):
    def __init__(self):
        super().__init__("User not found")


class SessionFull(ConflictError):
    """Raised when the session has no free places left."""

    def __init__(self):
        super().__init__("Session is full")


class AlreadyBooked(ConflictError):
    """Raised when the user is already a participant of the session."""

    def __init__(self):
        super().__init__("User already booked in this session")


class CapacityBelowParticipants(ConflictError):
    def __init__(self, participants: int):
        super().__init__(f"Capacity cannot be lower than the number of booked participants ({participants})")
